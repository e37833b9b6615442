"""
API Key Authentication

Mutating endpoints require an X-API-Key header. The key is checked in
order: present, non-blank, 10-200 characters, then equal to the configured
key. Reads and the documentation endpoints need no key.
"""

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader
import structlog

from demo_inventory.config import Settings
from demo_inventory.serving.api.dependencies import get_app_settings

logger = structlog.get_logger(__name__)

API_KEY_HEADER = "X-API-Key"
API_KEY_MIN_LENGTH = 10
API_KEY_MAX_LENGTH = 200

# Used when no API_KEY is configured; not for production
FALLBACK_API_KEY = "demo-inventory-api-key-2024"

# Declared for the OpenAPI schema; the raw header is inspected below so that
# a missing header and an empty one are reported differently
api_key_scheme = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def _unauthorized(message: str) -> HTTPException:
    logger.warning("API key rejected", reason=message)
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "ApiKey"},
    )


def configured_api_key(settings: Settings) -> str:
    """The configured API key, or the demo fallback with a warning"""
    if settings.security.api_key is not None:
        key = settings.security.api_key.get_secret_value()
        if key:
            return key
    logger.warning("Using fallback API key configuration. Set API_KEY in production.")
    return FALLBACK_API_KEY


async def require_api_key(
    request: Request,
    _: Optional[str] = Security(api_key_scheme),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """
    FastAPI dependency guarding mutating endpoints.

    Raises:
        HTTPException: 401 with the reason the key was rejected
    """
    presented = request.headers.get(API_KEY_HEADER)

    if presented is None:
        raise _unauthorized("API Key not found in header")
    if not presented.strip():
        raise _unauthorized("API Key is empty")
    if not API_KEY_MIN_LENGTH <= len(presented) <= API_KEY_MAX_LENGTH:
        raise _unauthorized("API Key format is invalid")
    if not secrets.compare_digest(presented.encode(), configured_api_key(settings).encode()):
        raise _unauthorized("Invalid API Key")

    return presented
