"""Shared services module for external integrations."""

from src.hausaworld.services.posthog import PostHogService

__all__ = [
    "PostHogService",
]
