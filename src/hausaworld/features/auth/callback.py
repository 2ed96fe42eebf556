"""OAuth callback handling: code exchange, session check, profile reconciliation."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from src.hausaworld.features.auth.profile import reconcile_profile
from src.hausaworld.features.auth.redirects import ErrorTag, auth_page_url, landing_page_url
from src.hausaworld.services import PostHogService
from src.hausaworld.services.auth.dependencies import SessionBackendFactory
from src.hausaworld.services.auth.exceptions import ProfileWriteError, SessionBackendError
from src.hausaworld.services.auth.models import UserIdentity

logger = logging.getLogger(__name__)

ProfileReconciler = Callable[[UserIdentity | None], Awaitable[ProfileWriteError | None]]


class CallbackState(str, Enum):
    """Progress of a single callback run."""

    START = "start"
    CODE_EXCHANGED = "code_exchanged"
    SESSION_CONFIRMED = "session_confirmed"
    PROFILE_RECONCILED = "profile_reconciled"
    FAILED = "failed"
    NO_SESSION = "no_session"


@dataclass
class CallbackOutcome:
    """Where a callback run ended and where the user is sent next."""

    state: CallbackState
    redirect_url: str
    error: ErrorTag | None = None
    user: UserIdentity | None = None
    profile_error: str | None = None


def _failed(tag: ErrorTag) -> CallbackOutcome:
    PostHogService().capture(
        distinct_id="anonymous",
        event="auth_callback_failed",
        properties={"error": tag.value},
    )
    return CallbackOutcome(state=CallbackState.FAILED, redirect_url=auth_page_url(tag), error=tag)


async def handle_auth_callback(
    current_url: str,
    backend_factory: SessionBackendFactory,
    reconcile: ProfileReconciler = reconcile_profile,
) -> CallbackOutcome:
    """
    Complete an OAuth sign-in.

    Exchanges the authorization code in ``current_url`` for a session, reads
    the session back, makes sure the user has a profile and sends them to the
    landing page. Each failing step ends the run with a tagged redirect to the
    auth page. Profile failures are logged and ignored.

    Runs once per callback request; authorization codes are single-use.

    Args:
        current_url: Full callback URL including the ``code`` query parameter
        backend_factory: Builds the session backend for the current request
        reconcile: Profile reconciler, returning an error instead of raising

    Returns:
        CallbackOutcome with the final state and redirect URL
    """
    state = CallbackState.START
    try:
        backend = backend_factory()
        try:
            await backend.exchange_code_for_session(current_url)
        except SessionBackendError as e:
            logger.error(f"Session exchange error: {e.message}", extra={"error_type": "session_failed"})
            return _failed(ErrorTag.SESSION_FAILED)
        state = CallbackState.CODE_EXCHANGED

        try:
            session = await backend.get_session()
        except SessionBackendError as e:
            logger.error(f"Auth error: {e.message}", extra={"error_type": "auth_failed"})
            return _failed(ErrorTag.AUTH_FAILED)

        if session is None:
            logger.info("Code exchange completed without a session, sending user to auth page")
            return CallbackOutcome(state=CallbackState.NO_SESSION, redirect_url=auth_page_url())
        state = CallbackState.SESSION_CONFIRMED

        profile_error = None
        try:
            error = await reconcile(session.user)
            if error is not None:
                profile_error = str(error)
        except Exception as e:
            profile_error = str(e)
        if profile_error:
            # Profile may already exist from the database trigger
            logger.error(
                f"Error ensuring profile for user {session.user.id}: {profile_error}",
                extra={"error_type": "profile_reconcile_failed", "user_id": str(session.user.id)},
            )
        state = CallbackState.PROFILE_RECONCILED

        logger.info(f"User signed in: {session.user.id} ({session.user.email})")
        PostHogService().capture(
            distinct_id=str(session.user.id),
            event="user_signed_in",
            properties={"email": session.user.email, "profile_error": profile_error is not None},
        )
        return CallbackOutcome(
            state=state,
            redirect_url=landing_page_url(),
            user=session.user,
            profile_error=profile_error,
        )

    except Exception as e:
        logger.error(
            f"Auth callback failed in state {state.value}: {e}",
            exc_info=True,
            extra={"error_type": "callback_failed", "state": state.value},
        )
        return _failed(ErrorTag.CALLBACK_FAILED)
