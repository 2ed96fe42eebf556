"""API handlers for the sign-in flow."""

import logging

from fastapi import APIRouter, Depends, Request

from src.hausaworld.features.auth.callback import handle_auth_callback
from src.hausaworld.features.auth.redirects import ErrorTag, auth_page_url, redirect_to
from src.hausaworld.features.auth.schemas import AuthPageResponse
from src.hausaworld.features.auth.sign_in import build_redirect_context, start_sign_in
from src.hausaworld.services.auth.cookies import CookieSessionStorage
from src.hausaworld.services.auth.dependencies import (
    SessionBackendFactory,
    get_cookie_storage,
    get_session_backend_factory,
)
from src.hausaworld.services.rate_limiter import public_rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("", response_model=AuthPageResponse)
async def get_auth_page(error: str | None = None) -> AuthPageResponse:
    """
    Auth page data.

    Echoes the error tag the user was redirected with (unknown tags are
    dropped) and points at the sign-in endpoint.
    """
    known = {tag.value for tag in ErrorTag}
    return AuthPageResponse(
        login_url=f"{auth_page_url()}/login",
        error=error if error in known else None,
    )


@router.get("/login")
@public_rate_limit
async def login(
    request: Request,
    backend_factory: SessionBackendFactory = Depends(get_session_backend_factory),
    storage: CookieSessionStorage = Depends(get_cookie_storage),
):
    """
    Start Google sign-in.

    Redirects to the provider's authorization URL. The PKCE code verifier is
    stored in a session cookie for the callback. If the flow cannot be
    started the user is sent back to the auth page.
    """
    origin = f"{request.url.scheme}://{request.url.netloc}"
    provider_url = await start_sign_in(backend_factory, build_redirect_context(origin))

    if provider_url is None:
        return redirect_to(auth_page_url(), storage)
    return redirect_to(provider_url, storage)


@router.get("/callback")
@public_rate_limit
async def auth_callback(
    request: Request,
    backend_factory: SessionBackendFactory = Depends(get_session_backend_factory),
    storage: CookieSessionStorage = Depends(get_cookie_storage),
):
    """
    OAuth callback.

    Exchanges the code for a session, provisions the profile and redirects to
    the landing page, or to the auth page with an error tag on failure.
    """
    outcome = await handle_auth_callback(str(request.url), backend_factory)
    logger.info(
        f"Auth callback finished in state {outcome.state.value}",
        extra={"state": outcome.state.value, "error": outcome.error.value if outcome.error else None},
    )
    return redirect_to(outcome.redirect_url, storage)
