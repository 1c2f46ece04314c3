"""
Identity middleware: attaches the caller's claims to every request.

A missing, malformed or expired bearer token leaves the request anonymous
instead of failing it. Routes that need an identity reject anonymous callers
through the gates in app.core.deps.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.exceptions import InvalidTokenError
from app.core.security import TokenCodec
from app.schemas.auth import Claims

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` value, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class IdentityMiddleware(BaseHTTPMiddleware):
    """Decode the bearer token (if any) into request.state.identity."""

    def __init__(self, app, codec: TokenCodec):
        super().__init__(app)
        self.codec = codec

    def resolve_identity(self, request: Request) -> Optional[Claims]:
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return None
        try:
            return self.codec.decode(token)
        except InvalidTokenError as e:
            logger.debug(f"Ignoring invalid bearer token on {request.url.path}: {e.message}")
            return None

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.identity = self.resolve_identity(request)
        return await call_next(request)
