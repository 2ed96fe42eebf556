"""Sign-in initiation: pick the OAuth callback URL and start the provider flow."""

import logging

from pydantic import BaseModel

from src.hausaworld.config import Settings, settings
from src.hausaworld.services import PostHogService
from src.hausaworld.services.auth.dependencies import SessionBackendFactory

logger = logging.getLogger(__name__)


class RedirectContext(BaseModel):
    """
    Inputs for choosing the OAuth callback URL.

    Attributes:
        request_origin: Origin the user is browsing from, when known
        dev_domain: Development domain (e.g. Replit dev host)
        platform_url: Deployment platform host (e.g. Vercel deployment URL)
        fallback_url: Production callback URL used when nothing else is set
    """

    request_origin: str | None = None
    dev_domain: str | None = None
    platform_url: str | None = None
    fallback_url: str


def build_redirect_context(request_origin: str | None, config: Settings | None = None) -> RedirectContext:
    """Assemble a RedirectContext from settings and the request origin."""
    config = config or settings
    return RedirectContext(
        request_origin=request_origin if config.auth_use_request_origin else None,
        dev_domain=config.replit_dev_domain,
        platform_url=config.vercel_url,
        fallback_url=config.auth_fallback_redirect_url,
    )


def compute_redirect_url(context: RedirectContext, callback_path: str | None = None) -> str:
    """
    Choose the OAuth callback URL. First match wins:

    1. the request origin
    2. the development domain
    3. the deployment platform URL
    4. the production fallback URL

    Example:
        >>> compute_redirect_url(RedirectContext(dev_domain="abc.replit.dev", fallback_url="https://x"))
        'https://abc.replit.dev/auth/callback'
    """
    callback_path = callback_path or settings.auth_callback_path

    if context.request_origin:
        return f"{context.request_origin.rstrip('/')}{callback_path}"
    if context.dev_domain:
        return f"https://{context.dev_domain}{callback_path}"
    if context.platform_url:
        return f"https://{context.platform_url}{callback_path}"
    return context.fallback_url


async def start_sign_in(backend_factory: SessionBackendFactory, context: RedirectContext) -> str | None:
    """
    Start the OAuth sign-in with the configured provider.

    Args:
        backend_factory: Builds the session backend for the current request
        context: Redirect URL inputs

    Returns:
        Provider authorization URL, or None if the flow could not be started
    """
    redirect_url = compute_redirect_url(context)
    logger.info(f"Starting {settings.oauth_provider} OAuth sign in, redirect URL: {redirect_url}")

    try:
        backend = backend_factory()
        provider_url = await backend.sign_in_with_oauth(settings.oauth_provider, redirect_url)
    except Exception as e:
        logger.error(f"OAuth error: {e}", exc_info=True, extra={"error_type": "oauth_start_failed"})
        return None

    PostHogService().capture(
        distinct_id="anonymous",
        event="sign_in_started",
        properties={"provider": settings.oauth_provider, "redirect_url": redirect_url},
    )
    return provider_url
