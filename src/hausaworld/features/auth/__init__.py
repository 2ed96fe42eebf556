"""Auth feature: sign-in, OAuth callback and profile reconciliation."""

from src.hausaworld.features.auth.handlers import router

__all__ = ["router"]
