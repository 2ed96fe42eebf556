"""Admin feature: route gate middleware and admin pages."""

from src.hausaworld.features.admin.handlers import router
from src.hausaworld.features.admin.middleware import AdminGateMiddleware, parse_admin_emails

__all__ = ["router", "AdminGateMiddleware", "parse_admin_emails"]
