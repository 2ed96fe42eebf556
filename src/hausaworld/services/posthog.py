"""PostHog analytics service for event tracking."""

import logging

import posthog

from src.hausaworld.config import settings

logger = logging.getLogger(__name__)


class PostHogService:
    """Service for tracking analytics events via PostHog."""

    def __init__(self) -> None:
        """Initialize PostHog service."""
        if settings.posthog_api_key:
            posthog.api_key = settings.posthog_api_key
            posthog.host = settings.posthog_host

    def capture(self, distinct_id: str, event: str, properties: dict | None = None) -> None:
        """
        Track an event.

        Analytics never decides where a user is redirected, so PostHog
        failures are logged and dropped here.

        Args:
            distinct_id: Unique identifier for the user
            event: Event name (e.g., "user_signed_in", "admin_access_denied")
            properties: Optional event properties

        Example:
            >>> service = PostHogService()
            >>> service.capture("user-123", "user_signed_in", {"provider": "google"})
        """
        if not settings.posthog_api_key:
            return

        try:
            posthog.capture(distinct_id=distinct_id, event=event, properties=properties or {})
        except Exception as e:
            logger.warning(
                f"PostHog capture failed for event {event}: {e}",
                extra={"error_type": "analytics_capture_failed", "event": event},
            )
