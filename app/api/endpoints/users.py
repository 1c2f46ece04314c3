"""
User account endpoints.

Listing and creating users is admin-only; everything under
/users/{username} is open to admins and to that user.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin, require_admin_or_self
from app.core.exceptions import UnauthorizedError
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.auth import Claims
from app.schemas.base import DeletedResponse
from app.schemas.user import (
    AppliedResponse,
    UserCreateRequest,
    UserDetail,
    UserDetailEnvelope,
    UserEnvelope,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
    UserWithTokenResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserWithTokenResponse,
    dependencies=[Depends(require_admin)],
)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Add a new user. Unlike /auth/register this can create admins.

    Returns the new user and a token for them.

    Authorization required: admin
    """
    user = user_crud.register(
        db,
        username=request.username,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        is_admin=request.is_admin,
    )
    return UserWithTokenResponse(user=UserResponse.model_validate(user), token=create_token(user))


@router.get("", response_model=UserListResponse, dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    """
    List all users.

    Authorization required: admin
    """
    users = user_crud.find_all(db)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/{username}", response_model=UserDetailEnvelope)
def get_user(
    username: str,
    identity: Claims = Depends(require_admin_or_self),
    db: Session = Depends(get_db)
):
    """
    Retrieve a user and the ids of jobs they applied to.

    Authorization required: admin or same user as {username}
    """
    user = user_crud.get(db, username)
    return UserDetailEnvelope(user=UserDetail.model_validate(user))


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    identity: Claims = Depends(require_admin_or_self),
    db: Session = Depends(get_db)
):
    """
    Update some of: firstName, lastName, password, email, isAdmin.

    Only admins may change isAdmin.

    Authorization required: admin or same user as {username}
    """
    data = request.to_update_data()
    if "isAdmin" in data and not identity.is_admin:
        raise UnauthorizedError()

    user = user_crud.update(db, username, data)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.delete(
    "/{username}",
    response_model=DeletedResponse,
    dependencies=[Depends(require_admin_or_self)],
)
def delete_user(username: str, db: Session = Depends(get_db)):
    """
    Delete a user.

    Authorization required: admin or same user as {username}
    """
    user_crud.remove(db, username)
    return DeletedResponse(deleted=username)


@router.post(
    "/{username}/jobs/{job_id}",
    response_model=AppliedResponse,
    dependencies=[Depends(require_admin_or_self)],
)
def apply_to_job(username: str, job_id: int, db: Session = Depends(get_db)):
    """
    Apply {username} to a job.

    Authorization required: admin or same user as {username}
    """
    user_crud.apply_to_job(db, username, job_id)
    return AppliedResponse(applied=job_id)
