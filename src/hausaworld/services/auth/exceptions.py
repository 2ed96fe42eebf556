"""Custom exceptions for authentication, sessions and profile provisioning."""


class SessionBackendError(Exception):
    """Raised when a call to the Supabase auth backend fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProfileWriteError(Exception):
    """Raised when the profile upsert is rejected by the database."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to create/update profile: {message}")
        self.message = message


class AdminConfigurationError(Exception):
    """Raised when the admin allow-list is missing or blank."""

    def __init__(self, message: str = "ADMIN_EMAILS environment variable is not configured") -> None:
        super().__init__(message)
        self.message = message
