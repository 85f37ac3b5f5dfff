"""Security utilities for session tokens and password hashing."""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from forum.config import settings
from forum.core.exceptions import UnauthorizedException


# Password hashing context - supports PBKDF2 (primary) and bcrypt (legacy)
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

# JWT settings
ALGORITHM = "HS256"
SESSION_TTL_HOURS = settings.SESSION_TTL_HOURS


def get_password_hash(password: str) -> str:
    """Hash a password using PBKDF2 (primary) or bcrypt (fallback)."""
    try:
        return pwd_context.hash(password)
    except ValueError:
        # Fallback to PBKDF2 if there's an issue
        fallback_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
        return fallback_ctx.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Return False if the hash scheme is unsupported
        return False


def create_session_token(
    session_uuid: str, expires_at: Optional[datetime] = None
) -> str:
    """Create a signed token that refers to a server-side session.

    Args:
        session_uuid: UUID of the row in the ``sessions`` table
        expires_at: Expiry of the session. If None, uses the default TTL

    Returns:
        Encoded JWT token

    Raises:
        ValueError: If SECRET_KEY is not configured
    """
    if not settings.SECRET_KEY:
        raise ValueError("SECRET_KEY environment variable is not set")

    if expires_at is None:
        expires_at = datetime.utcnow() + timedelta(hours=SESSION_TTL_HOURS)

    to_encode: Dict[str, Any] = {"sub": session_uuid, "exp": expires_at}

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and verify a session token.

    Args:
        token: JWT token string

    Returns:
        Token payload dictionary

    Raises:
        UnauthorizedException: If token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise UnauthorizedException("Could not validate credentials") from e


def get_token_subject(token: str) -> Optional[str]:
    """Extract the session UUID from a token, or None if the token is invalid."""
    try:
        payload = decode_token(token)
        return payload.get("sub")
    except UnauthorizedException:
        return None
