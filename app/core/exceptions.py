"""
Application error hierarchy.

Every error carries the HTTP status it maps to; the handler registered in
main.py turns any JoblyError into a {"detail": message} response.
"""

from fastapi import status


class JoblyError(Exception):
    """Base class for errors that are reported to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class NoUpdateDataError(BadRequestError):
    """A partial update was requested with zero fields."""

    default_message = "No data"


class NotFoundError(JoblyError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class UnauthorizedError(JoblyError):
    """An authorization gate rejected the caller."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class AuthenticationError(JoblyError):
    """
    Login failed.

    Raised for both unknown usernames and wrong passwords so callers cannot
    tell the two apart.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username/password"


class InvalidTokenError(JoblyError):
    """
    Bearer token failed signature, shape or expiry checks.

    IdentityMiddleware downgrades this to an anonymous request; it only
    surfaces as UnauthorizedError once a gate requires identity.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"
