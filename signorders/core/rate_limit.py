"""Rate limiting for the sign order API (slowapi)."""

import logging
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from signorders.core.config import settings

logger = logging.getLogger(__name__)

IS_TESTING = os.getenv("TESTING", "").lower() in ("1", "true", "yes")
MEMORY_STORAGE = "memory://"


def _default_limits() -> list[str]:
    if IS_TESTING or settings.RATE_LIMIT_API <= 0:
        return []
    return [f"{settings.RATE_LIMIT_API}/minute"]


def _storage_uri() -> str:
    """Redis when reachable (shared across workers), in-memory otherwise."""
    if IS_TESTING:
        return MEMORY_STORAGE
    try:
        import redis

        client = redis.from_url(settings.REDIS_URL, socket_connect_timeout=1)
        client.ping()
        return settings.REDIS_URL
    except Exception as e:
        logger.warning("Redis unavailable for rate limiting, using in-memory: %s", e)
        return MEMORY_STORAGE


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=_storage_uri(),
    default_limits=_default_limits(),
    enabled=not IS_TESTING,
)


def auth_limit() -> str:
    """Per-minute limit for credential endpoints (login)."""
    return f"{max(settings.RATE_LIMIT_AUTH, 1)}/minute"
