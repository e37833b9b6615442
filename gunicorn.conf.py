"""
Production Server Configuration

Run the inventory API with Uvicorn workers under Gunicorn. The in-memory
store is per worker process, so run a single worker when USE_IN_MEMORY_DB
is set.
"""

import multiprocessing
import os

_in_memory = os.getenv("USE_IN_MEMORY_DB", "false").lower() in ("1", "true", "yes")

# Server socket
bind = os.getenv("BIND", "0.0.0.0:5126")
backlog = 2048

# Worker processes
workers = 1 if _in_memory else int(os.getenv("WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 10000
max_requests_jitter = 1000
timeout = 120
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "demo-inventory-api"

# Server mechanics
daemon = False
pidfile = "/tmp/gunicorn.pid"
user = None
group = None
tmp_upload_dir = None

# Logging
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
