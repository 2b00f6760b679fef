"""
Errors raised by the storage layer.

RegistrationService turns them into Outcome values; on the read endpoints
they reach the FastAPI handlers, which use `to_payload()` / `http_status()`.
"""

from typing import Iterable


class RepositoryError(Exception):
    """
    A storage operation failed.

    Attributes:
        message: client-safe text, never raw driver output
        fields: column names involved, when known
        constraint: DB constraint name, for logs only
        error_code: short canonical code that selects the HTTP status
    """

    ERROR_CODE_TO_STATUS = {
        "duplicate": 409,
        "not_found": 404,
    }
    DEFAULT_STATUS = 400

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        details = [
            f"{label}: {value}"
            for label, value in (
                ("fields", ", ".join(self.fields) if self.fields else None),
                ("constraint", self.constraint),
                ("code", self.error_code),
            )
            if value
        ]
        if not details:
            return self.message
        return f"{self.message} ({'; '.join(details)})"

    def to_payload(self) -> dict:
        # same {"error": ...} shape POST /members uses for unexpected failures
        return {"error": self.message}

    def http_status(self) -> int:
        return self.ERROR_CODE_TO_STATUS.get(self.error_code, self.DEFAULT_STATUS)


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class DuplicateError(RepositoryError):
    """A UNIQUE constraint rejected the write."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
]
