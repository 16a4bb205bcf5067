"""Rate limiting configuration using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from vidtube.core.config import settings


# Credential endpoints are public, so they are limited per client address.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
)


def rate_limit_sensitive(limit: str = "10/minute"):
    """Rate limit for sensitive operations (login, register, token refresh)."""
    return limiter.limit(limit)
