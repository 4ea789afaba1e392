"""
Rate limiting configuration using slowapi.

Storage defaults to in-process memory; point RATE_LIMIT_STORAGE_URI at Redis
to share limits across workers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.config import settings


def _get_user_or_ip(request: Request) -> str:
    """
    Rate-limit key: authenticated profile ID if available, otherwise client IP.
    """
    profile = getattr(request.state, "current_user", None)
    if profile and hasattr(profile, "id"):
        return str(profile.id)
    return get_remote_address(request)


limiter = Limiter(
    key_func=_get_user_or_ip,
    storage_uri=settings.rate_limit_storage_uri,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)

# Pre-defined rate limit strings for use in route decorators:
#   @limiter.limit(RATE_EMAIL)
RATE_EMAIL = "5/minute"          # resend-verification - mailbox abuse protection
RATE_WALLET = "30/minute"        # top-up, apply
