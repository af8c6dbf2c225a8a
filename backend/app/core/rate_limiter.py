"""
Rate Limiting for the TechFest API
==================================
Implements rate limiting using slowapi with in-process storage.

Only the credential endpoints are limited (brute force protection):
- /auth/login
- /auth/register
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import logger


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit key.

    Priority:
    1. Authenticated user ID (set on request.state by auth dependency)
    2. IP address (for anonymous users)
    """
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


# Create limiter instance
limiter = Limiter(
    key_func=get_user_identifier,
    storage_uri="memory://",
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Custom handler for rate limit exceeded errors"""
    retry_after = exc.detail.split(":")[-1].strip() if exc.detail else "60"

    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={"message": "Too many requests. Please slow down."},
        headers={"Retry-After": retry_after if retry_after.isdigit() else "60"},
    )


def auth_rate_limit():
    """Rate limit for auth endpoints (AUTH_RATE_LIMIT, default 10/min)"""
    return limiter.limit(settings.AUTH_RATE_LIMIT, key_func=get_user_identifier)
