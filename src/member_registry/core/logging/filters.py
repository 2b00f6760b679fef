"""
Logging filters attached to every handler by builder.py.

RequestIdFilter
    Copies the id of the request being served onto each record, so format
    strings can use `%(request_id)s`. The id lives in a contextvar that
    RequestIDMiddleware sets; it follows the request across `await`s.

RedactFilter
    Member contact details and credentials passed through `extra={...}`
    are replaced with a mask before any handler formats them.
"""

import contextvars
import logging
from logging import LogRecord

NO_REQUEST = "-"
MASK = "***REDACTED***"

_current_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "member_registry_request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Bind `request_id` to the running context; keep the token for reset_request_id()."""
    return _current_request_id.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _current_request_id.reset(token)


def get_request_id() -> str | None:
    return _current_request_id.get()


class RequestIdFilter(logging.Filter):
    """
    Ensure `record.request_id` is set. A value passed explicitly via `extra`
    is kept, otherwise the contextvar is used, otherwise NO_REQUEST.
    Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        explicit = getattr(record, "request_id", None)
        record.request_id = explicit or get_request_id() or NO_REQUEST
        return True


class RedactFilter(logging.Filter):
    """Mask record attributes whose (case-insensitive) name is in SENSITIVE."""

    SENSITIVE = frozenset({
        "phone",
        "password",
        "secret",
        "token",
        "authorization",
        "postgres_password",
    })

    def filter(self, record: LogRecord) -> bool:
        hits = [key for key in vars(record) if key.lower() in self.SENSITIVE]
        for key in hits:
            setattr(record, key, MASK)
        return True
