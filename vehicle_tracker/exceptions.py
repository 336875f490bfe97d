"""
Hierarchie d'exceptions / Custom exception hierarchy.
Chaque erreur metier porte son code HTTP / Each domain error carries its HTTP status.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for all vehicle tracker errors."""

    status_code: int = 500
    title: str = "Internal Server Error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(TrackerError):
    """Malformed or out-of-range input."""

    status_code = 400
    title = "Validation error"


class ConflictError(TrackerError):
    """Uniqueness violation (duplicate vehicle name, username or email)."""

    status_code = 400
    title = "Conflict"


class NotFoundError(TrackerError):
    """Entity does not exist."""

    status_code = 404
    title = "Not found"


class AuthError(TrackerError):
    """Invalid credentials.

    The message is deliberately the same whether the account exists or the
    password is wrong.
    """

    status_code = 401
    title = "Invalid credentials"


class InternalError(TrackerError):
    """Unexpected store or runtime failure."""


class DuplicateKeyError(Exception):
    """Unique constraint violated at the storage layer."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Duplicate value for {field}")
