"""
Pydantic schemas for user accounts.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional

from app.schemas.base import CamelModel, UpdateModel


class UserCreateRequest(CamelModel):
    """Request schema for admin-created users (may create other admins)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    is_admin: bool = False


class UserUpdateRequest(UpdateModel):
    """Request schema for PATCH /users/{username}; username is immutable."""
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    password: str = Field(None, min_length=5, max_length=20)
    email: EmailStr = None
    is_admin: bool = None


class UserResponse(CamelModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetail(UserResponse):
    """User profile plus the ids of jobs the user applied to."""
    jobs: List[int] = Field(default_factory=list, validation_alias="job_ids")


class UserEnvelope(BaseModel):
    user: UserResponse


class UserDetailEnvelope(BaseModel):
    user: UserDetail


class UserWithTokenResponse(BaseModel):
    user: UserResponse
    token: str


class UserListResponse(BaseModel):
    users: List[UserResponse]


class AppliedResponse(BaseModel):
    applied: int
