"""
Demo Inventory Microservice

Product catalog management and category analytics over a FastAPI HTTP API,
backed by PostgreSQL or a process-local in-memory store.
"""

__version__ = "1.0.0"
