"""Pydantic schemas for the auth feature."""

from pydantic import BaseModel, Field


class AuthPageResponse(BaseModel):
    """Response model for the auth page endpoint."""

    login_url: str = Field(description="Endpoint that starts the OAuth sign-in")
    error: str | None = Field(None, description="Error tag the user was redirected with")

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "login_url": "/auth/login",
                "error": "session_failed",
            }
        }
