"""
Authentication endpoints.

- POST /auth/token: exchange username/password for a JWT
- POST /auth/register: create a (non-admin) account and receive a JWT

Tokens are sent back on later requests as ``Authorization: Bearer <token>``.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.auth import TokenResponse, UserAuthRequest, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserAuthRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT.

    Authorization required: none
    """
    try:
        user = user_crud.authenticate(db, request.username, request.password)
    except AuthenticationError:
        logger.warning(f"Failed login for username: {request.username}")
        raise

    logger.info(f"User logged in: {user.username}")
    return TokenResponse(token=create_token(user))


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account and return a JWT for immediate use.

    New accounts are never admins; admins are created through POST /users.

    Authorization required: none
    """
    new_user = user_crud.register(
        db,
        username=request.username,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        is_admin=False,
    )
    return TokenResponse(token=create_token(new_user))
