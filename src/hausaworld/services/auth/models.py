"""Data models for authentication."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel


class UserIdentity(BaseModel):
    """
    User identity issued by Supabase Auth.

    Immutable from this service's point of view. Used for admin checks and
    JIT (Just-In-Time) profile provisioning.

    Attributes:
        id: User UUID
        email: User email (may be missing for some providers)
        user_metadata: Additional OAuth metadata (full_name, avatar_url, etc.)

    Example:
        >>> user = UserIdentity(
        ...     id=UUID("123e4567-e89b-12d3-a456-426614174000"),
        ...     email="user@example.com",
        ...     user_metadata={"full_name": "Amina Bello"}
        ... )
    """

    id: UUID
    email: str | None = None
    user_metadata: dict[str, Any] = {}

    @classmethod
    def from_supabase(cls, user: Any) -> "UserIdentity":
        """Build from a Supabase ``User`` object."""
        return cls(
            id=UUID(str(user.id)),
            email=user.email,
            user_metadata=user.user_metadata or {},
        )


class AuthSession(BaseModel):
    """
    Session handed back by Supabase after a code exchange or session read.

    Passed explicitly through the callback handler and admin gate; there is
    no process-wide current session.
    """

    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None
    user: UserIdentity

    @classmethod
    def from_supabase(cls, session: Any) -> "AuthSession":
        """Build from a Supabase ``Session`` object."""
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            user=UserIdentity.from_supabase(session.user),
        )
