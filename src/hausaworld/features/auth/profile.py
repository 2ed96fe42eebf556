"""Profile reconciliation: make sure every signed-in user has a profile row."""

import logging
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from src.hausaworld.config import settings
from src.hausaworld.services.auth.exceptions import ProfileWriteError
from src.hausaworld.services.auth.models import UserIdentity
from src.hausaworld.services.database.utils import SupabaseQueryBuilder, get_query_builder

logger = logging.getLogger(__name__)


class ProfileRecord(BaseModel):
    """
    Row written to the profiles table, keyed by user id.

    Only these fields are written on upsert; any other column of an existing
    row is left untouched.
    """

    id: UUID
    email: str | None
    full_name: str | None
    avatar_url: str = ""
    notify_new_movies: bool = True


def build_profile_record(identity: UserIdentity) -> ProfileRecord:
    """
    Map a user identity onto a profile record.

    ``full_name`` falls back to the email and ``avatar_url`` to an empty
    string when the OAuth metadata does not carry them.
    """
    metadata = identity.user_metadata or {}
    return ProfileRecord(
        id=identity.id,
        email=identity.email,
        full_name=metadata.get("full_name") or identity.email,
        avatar_url=metadata.get("avatar_url") or "",
        notify_new_movies=True,
    )


async def ensure_profile(
    identity: UserIdentity | None,
    db: SupabaseQueryBuilder | None = None,
) -> dict[str, Any] | None:
    """
    Create or update the profile row for a user.

    Does nothing when no identity is given. Otherwise performs a single upsert
    on ``id`` that updates the existing row in place. Not retried.

    Args:
        identity: Signed-in user, or None
        db: Query builder (uses the service-role builder if None)

    Returns:
        The upserted row as returned by Supabase, or None

    Raises:
        ProfileWriteError: If the database rejects the upsert
    """
    if identity is None:
        return None

    db = db or get_query_builder()
    record = build_profile_record(identity).model_dump(mode="json")

    try:
        return await run_in_threadpool(
            db.upsert_record,
            settings.profiles_table,
            record,
            ["id"],
            False,
        )
    except Exception as e:
        message = getattr(e, "message", None) or str(e)
        logger.error(
            f"Error upserting profile for user {identity.id}: {message}",
            extra={"error_type": "profile_upsert_failed", "user_id": str(identity.id)},
        )
        raise ProfileWriteError(message) from e


async def reconcile_profile(
    identity: UserIdentity | None,
    db: SupabaseQueryBuilder | None = None,
) -> ProfileWriteError | None:
    """
    Best-effort form of ensure_profile.

    Returns the ProfileWriteError instead of raising it, so callers that can
    proceed without a profile (e.g. a database trigger may already have
    created it) discard it explicitly.
    """
    try:
        await ensure_profile(identity, db)
    except ProfileWriteError as e:
        return e
    return None
