"""Pytest configuration and shared fixtures."""

from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from src.hausaworld.main import app
from src.hausaworld.services.auth.exceptions import SessionBackendError
from src.hausaworld.services.auth.models import AuthSession, UserIdentity


class StubSessionBackend:
    """
    In-memory SessionBackend.

    Set ``session`` to the session to hand out and the ``*_error`` attributes
    to make the matching call fail. When ``storage`` is set, sign-in stores a
    code verifier and session reads store the (refreshed) session, the way
    Supabase writes to its storage.
    """

    def __init__(self) -> None:
        self.session: AuthSession | None = None
        self.provider_url = "https://accounts.google.com/o/oauth2/v2/auth?client_id=stub"
        self.sign_in_error: Exception | None = None
        self.exchange_error: Exception | None = None
        self.session_error: Exception | None = None
        self.storage = None
        self.calls: list[tuple] = []

    async def sign_in_with_oauth(self, provider: str, redirect_to: str) -> str:
        self.calls.append(("sign_in_with_oauth", provider, redirect_to))
        if self.sign_in_error:
            raise self.sign_in_error
        if self.storage is not None:
            self.storage.set_item("supabase.auth.token-code-verifier", "stub-verifier")
        return self.provider_url

    async def exchange_code_for_session(self, current_url: str) -> AuthSession | None:
        self.calls.append(("exchange_code_for_session", current_url))
        if self.exchange_error:
            raise self.exchange_error
        return self.session

    async def get_session(self) -> AuthSession | None:
        self.calls.append(("get_session",))
        if self.session_error:
            raise self.session_error
        if self.session is not None and self.storage is not None:
            self.storage.set_item("supabase.auth.token", self.session.model_dump_json())
        return self.session

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)


@pytest.fixture
def client() -> TestClient:
    """
    Provide FastAPI test client for API testing.

    Returns:
        TestClient instance for making API requests

    Example:
        >>> def test_health(client):
        >>>     response = client.get("/health")
        >>>     assert response.status_code == 200
    """
    return TestClient(app)


@pytest.fixture
def mock_user_id() -> UUID:
    """Provide a consistent test user ID."""
    return UUID("123e4567-e89b-12d3-a456-426614174000")


@pytest.fixture
def identity(mock_user_id: UUID) -> UserIdentity:
    """Provide a signed-in Google user."""
    return UserIdentity(
        id=mock_user_id,
        email="b@x.com",
        user_metadata={
            "full_name": "Amina Bello",
            "avatar_url": "https://lh3.googleusercontent.com/a/amina",
        },
    )


@pytest.fixture
def auth_session(identity: UserIdentity) -> AuthSession:
    """Provide a session for the test user."""
    return AuthSession(
        access_token="access-token",
        refresh_token="refresh-token",
        expires_at=9999999999,
        user=identity,
    )


@pytest.fixture
def stub_backend() -> StubSessionBackend:
    """Provide a stub session backend with no session."""
    return StubSessionBackend()


@pytest.fixture
def backend_error() -> SessionBackendError:
    """Provide a typical backend failure."""
    return SessionBackendError("invalid flow state, no valid flow state found")
