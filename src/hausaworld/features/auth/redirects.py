"""Redirect destinations and the error tags carried on them."""

from enum import Enum

from fastapi import status
from fastapi.responses import RedirectResponse

from src.hausaworld.config import settings
from src.hausaworld.services.auth.cookies import CookieSessionStorage


class ErrorTag(str, Enum):
    """Machine-readable error tags appended to redirect URLs as ``?error=``."""

    ADMIN_CONFIG = "admin_config"
    SESSION_FAILED = "session_failed"
    AUTH_FAILED = "auth_failed"
    CALLBACK_FAILED = "callback_failed"
    MIDDLEWARE = "middleware"
    ADMIN_ACCESS = "admin_access"


def _with_error(path: str, tag: ErrorTag | None) -> str:
    if tag is None:
        return path
    return f"{path}?error={tag.value}"


def auth_page_url(tag: ErrorTag | None = None) -> str:
    """Auth page, optionally tagged with the failure that sent the user there."""
    return _with_error(settings.auth_page_path, tag)


def home_page_url(tag: ErrorTag | None = None) -> str:
    """Home page, optionally tagged (used for authenticated but unauthorized users)."""
    return _with_error(settings.home_page_path, tag)


def landing_page_url() -> str:
    """Page authenticated users land on after signing in."""
    return settings.landing_page_path


def redirect_to(url: str, storage: CookieSessionStorage | None = None) -> RedirectResponse:
    """
    Build a 302 redirect, carrying any pending session cookie writes.

    Args:
        url: Redirect target
        storage: Request cookie storage whose buffered writes must be sent

    Returns:
        RedirectResponse
    """
    response = RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
    if storage is not None:
        storage.apply_to(response)
    return response
