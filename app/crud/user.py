"""
CRUD operations for User model, including credential verification and
job applications.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from app.core.exceptions import AuthenticationError, BadRequestError, NotFoundError
from app.core.security import dummy_verify_password, get_password_hash, verify_password
from app.crud.base import partial_update
from app.models import Application, Job, User

logger = logging.getLogger(__name__)

USER_JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}
UPDATABLE_COLUMNS = {"first_name", "last_name", "password", "email", "is_admin"}


def get_credentials(db: Session, username: str) -> Optional[User]:
    """Look up the stored credential record (password hash, is_admin) for a username."""
    return db.query(User).filter(User.username == username).first()


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Verify a username/password pair.

    Unknown usernames and wrong passwords raise the same error.

    Returns:
        The matching User (including is_admin)

    Raises:
        AuthenticationError: if the credentials do not match a user
    """
    user = get_credentials(db, username)
    if user is None:
        # Keep timing comparable to a real hash check
        dummy_verify_password()
        raise AuthenticationError()

    if not verify_password(password, user.password):
        raise AuthenticationError()

    return user


def register(
    db: Session,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    email: str,
    is_admin: bool = False,
) -> User:
    """
    Create a user with a hashed password.

    Raises:
        BadRequestError: if the username is taken
    """
    if get_credentials(db, username) is not None:
        raise BadRequestError(f"Duplicate username: {username}")

    user = User(
        username=username,
        password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        email=email,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Registered user {username} (admin: {is_admin})")
    return user


def find_all(db: Session) -> List[User]:
    """Return all users ordered by username."""
    return db.query(User).order_by(User.username).all()


def get(db: Session, username: str) -> User:
    """
    Retrieve a user by username.

    Raises:
        NotFoundError: if no such user
    """
    user = db.get(User, username)
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, data: dict) -> User:
    """
    Partially update a user with the camelCase fields in ``data``.

    A new password is hashed before it is stored.

    Raises:
        NoUpdateDataError: data is empty
        NotFoundError: if no such user
    """
    data = dict(data)
    if "password" in data:
        data["password"] = get_password_hash(data["password"])

    partial_update(
        db,
        User,
        key_column="username",
        key=username,
        data=data,
        js_to_sql=USER_JS_TO_SQL,
        updatable_columns=UPDATABLE_COLUMNS,
        not_found_message=f"No user: {username}",
    )
    return get(db, username)


def remove(db: Session, username: str) -> None:
    """
    Delete a user and their applications.

    Raises:
        NotFoundError: if no such user
    """
    user = get(db, username)
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> Application:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: if the user or job does not exist
        BadRequestError: if the user already applied to this job
    """
    if db.get(Job, job_id) is None:
        raise NotFoundError(f"No job: {job_id}")
    get(db, username)

    if db.get(Application, (username, job_id)) is not None:
        raise BadRequestError(f"Already applied to job: {job_id}")

    application = Application(username=username, job_id=job_id)
    db.add(application)
    db.commit()

    logger.info(f"User {username} applied to job {job_id}")
    return application
