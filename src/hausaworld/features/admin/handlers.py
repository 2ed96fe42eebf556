"""API handlers for admin pages (all behind AdminGateMiddleware)."""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from src.hausaworld.features.admin.schemas import AdminOverviewResponse
from src.hausaworld.services.auth.models import UserIdentity
from src.hausaworld.services.rate_limiter import default_rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("", response_model=AdminOverviewResponse)
@default_rate_limit
async def get_admin_overview(request: Request) -> AdminOverviewResponse:
    """
    Admin overview for the signed-in admin.

    Raises:
        HTTPException: 401 if the request did not pass through the admin gate
    """
    user: UserIdentity | None = getattr(request.state, "user", None)
    if user is None or not user.email:
        logger.warning("Admin overview reached without a gated user")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin session required",
        )

    return AdminOverviewResponse(user_id=user.id, email=user.email)
