"""
Decide which kind of constraint an IntegrityError reports.

The classes here are labels for mapper.py and are not raised.

| label                    | becomes                               |
| ------------------------ | ------------------------------------- |
| UniqueConstraintError    | DuplicateError (409)                  |
| NotNullConstraintError   | RepositoryError "Missing ..."         |
| UnknownIntegrityError    | RepositoryError "... integrity error" |

Postgres drivers report a SQLSTATE, which is used when present. SQLite
only reports text, so the message is matched against known phrases.
"""

import logging
from enum import Enum
from typing import Type

from sqlalchemy.exc import IntegrityError

from .base import RepositoryError

logger = logging.getLogger(__name__)


class ConstraintViolationError(RepositoryError):
    pass


class UniqueConstraintError(ConstraintViolationError):
    pass


class NotNullConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    pass


Classification = tuple[Type[ConstraintViolationError], str | None]


class PostgresErrorCodes(str, Enum):
    # https://www.postgresql.org/docs/current/errcodes-appendix.html
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"


SQLSTATE_LABELS = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: NotNullConstraintError,
}

MESSAGE_LABELS: list[tuple[tuple[str, ...], Type[ConstraintViolationError]]] = [
    (("unique constraint", "unique failed", "unique violation", "duplicate"), UniqueConstraintError),
    (("not null constraint", "not null", "null value in column"), NotNullConstraintError),
]


def _sqlstate(orig) -> str | None:
    # psycopg: pgcode, asyncpg via the SQLAlchemy adapter: sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _classify_by_sqlstate(orig, sqlstate: str) -> Classification:
    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)

    label = SQLSTATE_LABELS.get(sqlstate)
    if label is None:
        logger.warning(
            "integrity.unknown_sqlstate",
            extra={"sqlstate": sqlstate, "constraint": constraint_name},
        )
        return UnknownIntegrityError, constraint_name

    logger.debug("integrity.sqlstate", extra={"sqlstate": sqlstate, "constraint": constraint_name})
    return label, constraint_name


def _classify_by_message(message: str) -> Classification:
    lowered = message.lower()
    for phrases, label in MESSAGE_LABELS:
        if any(phrase in lowered for phrase in phrases):
            return label, None

    logger.warning("integrity.unknown_message", extra={"message_snippet": message[:200]})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> Classification:
    """Return `(label class, constraint name or None)` for `exc`."""
    orig = exc.orig
    sqlstate = _sqlstate(orig)
    if sqlstate:
        return _classify_by_sqlstate(orig, sqlstate)
    return _classify_by_message(str(orig))
