"""Core module exports."""

from .security import (
    create_session_token,
    decode_token,
    get_password_hash,
    get_token_subject,
    verify_password,
    ALGORITHM,
    SESSION_TTL_HOURS,
)

__all__ = [
    "create_session_token",
    "decode_token",
    "get_password_hash",
    "get_token_subject",
    "verify_password",
    "ALGORITHM",
    "SESSION_TTL_HOURS",
]
