"""Rate limiting service for API endpoints."""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.hausaworld.config import settings
from src.hausaworld.services.auth.models import UserIdentity

logger = logging.getLogger(__name__)


def get_user_id_or_ip(request: Request) -> str:
    """
    Extract user ID from the request or fall back to IP address.

    This function is used as the key_func for rate limiting:
    - Requests that passed the admin gate: Rate limited per user ID
    - Everything else: Rate limited per IP address

    Args:
        request: FastAPI request object

    Returns:
        User ID string or IP address
    """
    user: UserIdentity | None = getattr(request.state, "user", None)

    if user and user.id:
        return f"user:{user.id}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_user_id_or_ip,
    default_limits=[],  # No global limits, applied per endpoint
    storage_uri="memory://",  # In-memory storage for single-instance deployment
    enabled=settings.rate_limit_enabled,
)


class RateLimitTiers:
    """Rate limit tiers for different endpoint categories."""

    # Admin pages behind the gate
    DEFAULT = ["100 per minute", "1000 per hour"]

    # Sign-in and OAuth callback (unauthenticated, IP-based)
    PUBLIC = ["20 per minute", "100 per hour"]


# These decorators require the endpoint to have a 'request: Request' parameter
default_rate_limit = limiter.limit(";".join(RateLimitTiers.DEFAULT))
public_rate_limit = limiter.limit(";".join(RateLimitTiers.PUBLIC))
