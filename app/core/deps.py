"""
FastAPI dependencies for authentication and authorization.

IdentityMiddleware has already placed the caller's claims (or None) on
request.state. These dependencies turn the gates from app.core.permissions
into route preconditions: they are resolved before the endpoint body runs,
so a failing gate means the endpoint never executes.
"""

from typing import Optional

from fastapi import Depends, Request

from app.core.permissions import ensure_admin, ensure_admin_or_self, ensure_logged_in
from app.schemas.auth import Claims


def current_identity(request: Request) -> Optional[Claims]:
    """
    Return the claims attached to this request, or None when anonymous.

    Usage:
        @router.get("/companies")
        def list_companies(identity: Optional[Claims] = Depends(current_identity)):
            ...
    """
    return getattr(request.state, "identity", None)


def require_logged_in(
    identity: Optional[Claims] = Depends(current_identity),
) -> Claims:
    """
    Require any authenticated caller.

    Raises:
        UnauthorizedError: caller is anonymous (no token or an invalid one)
    """
    return ensure_logged_in(identity)


def require_admin(
    identity: Optional[Claims] = Depends(current_identity),
) -> Claims:
    """
    Require an authenticated caller with the admin flag.

    Raises:
        UnauthorizedError: caller is anonymous or not an admin
    """
    return ensure_admin(identity)


def require_admin_or_self(
    username: str,
    identity: Optional[Claims] = Depends(current_identity),
) -> Claims:
    """
    Require an admin, or the user named by the ``{username}`` path parameter.

    Raises:
        UnauthorizedError: caller is anonymous, or a non-admin acting on
            another user's account
    """
    return ensure_admin_or_self(identity, username)
