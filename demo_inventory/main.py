"""
Demo Inventory API

Main entry point:
    uvicorn demo_inventory.main:app --port 5126
"""

import uvicorn

from demo_inventory.config import get_settings
from demo_inventory.serving.api import create_app

settings = get_settings()

app = create_app(settings)


def run() -> None:
    """Console script entry point."""
    uvicorn.run(
        "demo_inventory.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.monitoring.log_level.lower(),
        reload=settings.is_development and settings.debug,
    )


if __name__ == "__main__":
    run()
