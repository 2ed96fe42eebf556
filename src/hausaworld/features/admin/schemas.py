"""Pydantic schemas for the admin feature."""

from uuid import UUID

from pydantic import BaseModel, Field


class AdminOverviewResponse(BaseModel):
    """Response model for the admin overview endpoint."""

    user_id: UUID = Field(description="Admin user's ID")
    email: str = Field(description="Admin user's email address")
