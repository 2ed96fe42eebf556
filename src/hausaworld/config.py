"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # System Configuration
    debug: bool = False
    cors_origins: str = "http://localhost:3000"
    rate_limit_enabled: bool = True

    # Supabase Configuration
    supabase_url: str = "https://test.supabase.co"
    supabase_anon_key: str = "test-anon-key"
    supabase_service_role_key: str = "test-service-role-key"

    # OAuth Sign-In
    oauth_provider: str = "google"
    auth_callback_path: str = "/auth/callback"
    auth_use_request_origin: bool = True
    replit_dev_domain: str | None = None
    vercel_url: str | None = None
    auth_fallback_redirect_url: str = "https://hausaworld.vercel.app/auth/callback"

    # Session Cookies
    session_cookie_prefix: str = "sb"
    session_cookie_secure: bool = True
    session_cookie_max_age_seconds: int = 60 * 60 * 24 * 7  # 1 week

    # Route Surface
    auth_page_path: str = "/auth"
    home_page_path: str = "/"
    landing_page_path: str = "/profile"
    admin_path_prefix: str = "/admin"

    # Admin allow-list (comma-separated, re-read per request)
    admin_emails: str | None = None

    # Profiles
    profiles_table: str = "profiles"

    # PostHog Configuration
    posthog_api_key: str | None = None
    posthog_host: str = "https://app.posthog.com"


def get_settings() -> Settings:
    """
    Build a fresh Settings instance from the current environment.

    Used where a value must be re-read on every request instead of
    taken from the module-level ``settings`` snapshot.
    """
    return Settings()


settings = Settings()
