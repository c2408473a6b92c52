"""Schemas for admin authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class AdminLogin(BaseModel):
    """Schema for admin login."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminInfo(BaseModel):
    """Schema for admin info in auth responses."""

    id: int
    username: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """Schema for token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    admin: AdminInfo


class TokenVerification(BaseModel):
    """Schema for the token check endpoint."""

    authenticated: bool = True
    admin: AdminInfo


class ChangePasswordRequest(BaseModel):
    """Schema for changing the admin password."""

    current_password: str
    new_password: str = Field(min_length=8, max_length=100)
