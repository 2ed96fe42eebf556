"""Tests for the sign-in flow API handlers."""

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from src.hausaworld.main import app
from src.hausaworld.services.auth.cookies import CookieSessionStorage
from src.hausaworld.services.auth.dependencies import get_cookie_storage, get_session_backend_factory


@pytest.fixture
def auth_client(stub_backend, profiles_db, monkeypatch) -> TestClient:
    """Test client whose requests use the stub backend and in-memory profiles."""

    def override_factory(storage: CookieSessionStorage = Depends(get_cookie_storage)):
        stub_backend.storage = storage
        return lambda: stub_backend

    app.dependency_overrides[get_session_backend_factory] = override_factory
    monkeypatch.setattr("src.hausaworld.features.auth.profile.get_query_builder", lambda: profiles_db)
    yield TestClient(app)
    app.dependency_overrides.pop(get_session_backend_factory, None)


class TestAuthPage:
    """Tests for GET /auth."""

    def test_without_error(self, client: TestClient) -> None:
        response = client.get("/auth")

        assert response.status_code == 200
        assert response.json() == {"login_url": "/auth/login", "error": None}

    def test_known_error_tag_is_echoed(self, client: TestClient) -> None:
        response = client.get("/auth?error=admin_config")

        assert response.json()["error"] == "admin_config"

    def test_unknown_error_tag_is_dropped(self, client: TestClient) -> None:
        response = client.get("/auth?error=<script>")

        assert response.json()["error"] is None


class TestLogin:
    """Tests for GET /auth/login."""

    def test_redirects_to_provider(self, auth_client: TestClient, stub_backend) -> None:
        response = auth_client.get("/auth/login", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == stub_backend.provider_url
        assert stub_backend.calls == [
            ("sign_in_with_oauth", "google", "http://testserver/auth/callback")
        ]

    def test_sets_code_verifier_cookie(self, auth_client: TestClient) -> None:
        response = auth_client.get("/auth/login", follow_redirects=False)

        cookies = response.headers.get_list("set-cookie")
        assert any(c.startswith("sb-supabase-auth-token-code-verifier=stub-verifier") for c in cookies)

    def test_provider_failure_returns_to_auth_page(
        self, auth_client: TestClient, stub_backend, backend_error
    ) -> None:
        stub_backend.sign_in_error = backend_error

        response = auth_client.get("/auth/login", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/auth"


class TestCallback:
    """Tests for GET /auth/callback."""

    def test_success_redirects_to_profile(
        self, auth_client: TestClient, stub_backend, auth_session, profiles_db
    ) -> None:
        stub_backend.session = auth_session

        response = auth_client.get("/auth/callback?code=4f1c2a", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/profile"
        assert stub_backend.calls[0] == (
            "exchange_code_for_session",
            "http://testserver/auth/callback?code=4f1c2a",
        )
        assert len(profiles_db.rows("profiles")) == 1

    def test_session_cookie_is_set(self, auth_client: TestClient, stub_backend, auth_session) -> None:
        stub_backend.session = auth_session

        response = auth_client.get("/auth/callback?code=4f1c2a", follow_redirects=False)

        cookies = response.headers.get_list("set-cookie")
        assert any(c.startswith("sb-supabase-auth-token=") for c in cookies)

    def test_exchange_failure(self, auth_client: TestClient, stub_backend, backend_error, profiles_db) -> None:
        stub_backend.exchange_error = backend_error

        response = auth_client.get("/auth/callback?code=used-code", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/auth?error=session_failed"
        assert profiles_db.upsert_calls == []

    def test_profile_failure_still_lands(
        self, auth_client: TestClient, stub_backend, auth_session, profiles_db
    ) -> None:
        stub_backend.session = auth_session
        profiles_db.error = RuntimeError("relation profiles does not exist")

        response = auth_client.get("/auth/callback?code=4f1c2a", follow_redirects=False)

        assert response.headers["location"] == "/profile"


class TestSupabaseClientFailure:
    """Routes redirect when the per-request Supabase client cannot be built."""

    @pytest.fixture
    def broken_client(self, monkeypatch) -> TestClient:
        def broken_session_client(storage):
            raise ValueError("Invalid URL")

        monkeypatch.setattr(
            "src.hausaworld.services.auth.dependencies.create_session_client", broken_session_client
        )
        return TestClient(app, raise_server_exceptions=False)

    def test_callback_redirects_with_callback_failed(self, broken_client: TestClient) -> None:
        response = broken_client.get("/auth/callback?code=abc", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/auth?error=callback_failed"

    def test_login_returns_to_auth_page(self, broken_client: TestClient) -> None:
        response = broken_client.get("/auth/login", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/auth"
