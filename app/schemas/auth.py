"""
Pydantic schemas for authentication: login/register bodies, token responses
and the identity claims carried inside a bearer token.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.base import CamelModel


class Claims(BaseModel):
    """Identity recovered from a verified bearer token."""
    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1)
    is_admin: bool = False


class UserAuthRequest(BaseModel):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)


class UserRegisterRequest(CamelModel):
    """Request schema for POST /auth/register (always creates a non-admin)."""
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str
