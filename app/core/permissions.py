"""
Authorization gates over the identity attached by IdentityMiddleware.

Each is_* helper is a plain predicate; each ensure_* helper raises
UnauthorizedError when its predicate fails and otherwise returns the claims.
Anonymous callers are represented by None.
"""

from typing import Optional

from app.core.exceptions import UnauthorizedError
from app.schemas.auth import Claims


def is_logged_in(identity: Optional[Claims]) -> bool:
    return identity is not None


def is_admin(identity: Optional[Claims]) -> bool:
    return identity is not None and identity.is_admin


def is_admin_or_self(identity: Optional[Claims], owner: str) -> bool:
    """
    Check if the caller is an admin or owns the resource.

    Args:
        identity: Claims of the caller, or None when anonymous
        owner: Username that owns the resource being accessed

    Returns:
        bool: True if access is allowed
    """
    if identity is None:
        return False
    return identity.is_admin or identity.username == owner


def ensure_logged_in(identity: Optional[Claims]) -> Claims:
    """Raise UnauthorizedError for anonymous callers."""
    if not is_logged_in(identity):
        raise UnauthorizedError()
    return identity


def ensure_admin(identity: Optional[Claims]) -> Claims:
    """Raise UnauthorizedError unless the caller is a logged-in admin."""
    if not is_admin(identity):
        raise UnauthorizedError()
    return identity


def ensure_admin_or_self(identity: Optional[Claims], owner: str) -> Claims:
    """Raise UnauthorizedError unless the caller is an admin or is ``owner``."""
    if not is_admin_or_self(identity, owner):
        raise UnauthorizedError()
    return identity
