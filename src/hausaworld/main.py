"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.hausaworld.config import settings
from src.hausaworld.features.admin import AdminGateMiddleware
from src.hausaworld.features.admin import router as admin_router
from src.hausaworld.features.auth import router as auth_router
from src.hausaworld.services.rate_limiter import limiter

logger = logging.getLogger(__name__)

app = FastAPI(
    title="HausaWorld Auth Gateway",
    description="Google sign-in, profile provisioning and admin gating backed by Supabase",
    version="0.1.0",
    debug=settings.debug,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
logger.info(f"Origins : {origins}")

# Added first so CORS wraps the gate and applies to its redirects too
app.add_middleware(AdminGateMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(auth_router)
app.include_router(admin_router)


class HealthCheckResponse(BaseModel):
    """Health check response."""

    status: str


@app.get("/health", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint."""
    return HealthCheckResponse(status="healthy")
