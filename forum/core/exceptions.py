"""Custom exceptions for the forum application."""

from typing import Iterable, Optional

from fastapi import HTTPException, status


class ForumException(HTTPException):
    """Base exception for errors surfaced to forum clients."""
    pass


class NotFoundException(ForumException):
    """Exception when a post, comment, user or category does not exist."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ForumValidationException(ForumException):
    """
    Exception for input that is well-formed but not acceptable.

    The offending field names are listed so the client can highlight them.

    Status Code: 422 Unprocessable Entity

    Response Body:
        {
            "detail": {
                "message": "Email already exists; Username already exists",
                "fields": ["email", "username"]
            }
        }
    """

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        self.fields = list(fields or [])
        super().__init__(
            status_code=422,
            detail={"message": message, "fields": self.fields},
        )


class ForbiddenException(ForumException):
    """Exception when the current user lacks the role or ownership required."""

    def __init__(self, detail: str = "You do not have permission to perform this action"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class UnauthorizedException(ForumException):
    """Exception when no valid login session accompanies the request."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class PersistenceException(ForumException):
    """Exception when the database fails; details stay in the server log."""

    def __init__(self, detail: str = "A storage error occurred. Please try again later."):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


__all__ = [
    "ForumException",
    "NotFoundException",
    "ForumValidationException",
    "ForbiddenException",
    "UnauthorizedException",
    "PersistenceException",
]
