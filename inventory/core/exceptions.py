"""Application exceptions.

Each exception carries the HTTP status it maps to; the handler installed in
``inventory.main`` turns them into JSON responses. Absence of an item is not
an error inside the core (repositories return ``None``); ``NotFoundError`` is
raised only where an operation has nothing sensible to return.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code for clients.
        status_code: HTTP status code to return.
        details: Additional error details (e.g., field names, IDs).
    """

    message: str = "An error occurred"
    code: str = "APP_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.__class__.message
        self.code = code or self.__class__.code
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r})"


# === 4xx Client Errors ===


class ValidationError(AppException):
    """Missing or invalid required input (400)."""

    message = "Validation error"
    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(AppException):
    """Referenced item or photo does not exist (404)."""

    message = "Inventory with this id not found"
    code = "NOT_FOUND"
    status_code = 404


# === 5xx Server Errors ===


class StorageError(AppException):
    """Photo file operation failed (500)."""

    message = "Photo storage error"
    code = "STORAGE_ERROR"
    status_code = 500


class RepositoryError(AppException):
    """Item record store operation failed (500)."""

    message = "Inventory store error"
    code = "REPOSITORY_ERROR"
    status_code = 500
