"""
Security utilities for JWT authentication and password hashing.

Implements stateless JWT authentication using HS256 (shared secret).
Passwords are hashed using bcrypt for security.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict
from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode
from passlib.context import CryptContext
from app.core.config import settings
from app.core.exceptions import InvalidTokenError
from app.schemas.auth import Claims

# Password hashing context (bcrypt)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_WORK_FACTOR,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    return pwd_context.verify(password_bytes, hashed_password)


def dummy_verify_password() -> None:
    """Spend the same time as a real verification when there is no hash to check."""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


def is_canonical_segment(segment: str) -> bool:
    """
    True if ``segment`` is exactly how base64url would encode its own bytes.

    The decoder ignores the unused low bits of the final character, so a
    token with a different trailing character can still decode to the same
    bytes. Requiring the canonical form makes every character significant.
    """
    try:
        raw = segment.encode("ascii")
        return base64url_encode(base64url_decode(raw)) == raw
    except (ValueError, TypeError):
        return False


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Issues and verifies signed, time-limited bearer tokens.

    The secret, lifetime and clock are injected so that tokens can be
    checked deterministically; the codec holds no other state.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret:
            raise ValueError("TokenCodec requires a non-empty secret")
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime
        self.clock = clock

    def issue(self, identity: Any) -> str:
        """
        Create a token for anything exposing ``username`` and ``is_admin``.

        Args:
            identity: User row or Claims instance

        Returns:
            Encoded JWT as a string
        """
        now = self.clock()
        payload = {
            "username": identity.username,
            "is_admin": bool(identity.is_admin),
            "iat": int(now.timestamp()),
            "exp": int((now + self.lifetime).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Claims:
        """
        Verify a token and return the claims it carries.

        Raises:
            InvalidTokenError: bad signature, malformed payload or expired
        """
        if not isinstance(token, str) or not all(is_canonical_segment(s) for s in token.split(".")):
            raise InvalidTokenError("Invalid token: malformed segment")

        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except (JWTError, AttributeError, TypeError) as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        claims = self._claims_from_payload(payload)

        exp = payload.get("exp")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise InvalidTokenError("Token has no expiration")
        if exp <= self.clock().timestamp():
            raise InvalidTokenError("Token has expired")

        return claims

    @staticmethod
    def _claims_from_payload(payload: Dict[str, Any]) -> Claims:
        username = payload.get("username")
        is_admin = payload.get("is_admin")
        if not isinstance(username, str) or not username:
            raise InvalidTokenError("Token payload has no username")
        if not isinstance(is_admin, bool):
            raise InvalidTokenError("Token payload has no admin flag")
        return Claims(username=username, is_admin=is_admin)


token_codec = TokenCodec(
    secret=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    lifetime=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
)


def create_token(user: Any) -> str:
    """Return a signed JWT for a user (username + is_admin flag)."""
    return token_codec.issue(user)


def decode_token(token: str) -> Claims:
    """Decode and validate a JWT issued by this process."""
    return token_codec.decode(token)
