"""
Translate driver-level IntegrityErrors into repository errors, and the
`db_error_handler` context manager repositories wrap their writes in.
"""

import logging
import re
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base import DuplicateError, RepositoryError
from .integrity_classifier import (
    NotNullConstraintError,
    UniqueConstraintError,
    classify_integrity_error,
)

logger = logging.getLogger(__name__)

# Postgres: 'null value in column "name" ...'
_PG_NULL_COLUMN = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
# Postgres: 'DETAIL:  Key (email)=(a@b.com) already exists.'
_PG_KEY_COLUMNS = re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE)
# SQLite: 'UNIQUE constraint failed: members.email'
_SQLITE_COLUMNS = re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE)
# 'duplicate key value violates unique constraint "uq_members_email"'
_CONSTRAINT_IN_MESSAGE = re.compile(r'constraint "(?P<name>[^"]+)"')
# Base.metadata naming convention for unique constraints: uq_<table>_<column>
_UQ_NAME = re.compile(r'uq_[a-z0-9]+_(?P<col>.+)$')


def _columns_from_message(message: str) -> list[str] | None:
    m = _PG_NULL_COLUMN.search(message)
    if m:
        return [m.group("col")]

    m = _PG_KEY_COLUMNS.search(message)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = _SQLITE_COLUMNS.search(message)
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]

    return None


def _columns_from_constraint(constraint_name: str | None) -> list[str] | None:
    m = _UQ_NAME.match(constraint_name) if constraint_name else None
    return [m.group("col")] if m else None


def extract_columns_from_integrity(exc: IntegrityError, constraint_name: str | None = None) -> list[str] | None:
    """
    Best effort: the offending column names, read from the driver message,
    then from the constraint name. None when neither says.
    """
    message = str(exc.orig) if exc.orig is not None else str(exc)
    if constraint_name is None:
        m = _CONSTRAINT_IN_MESSAGE.search(message)
        constraint_name = m.group("name") if m else None
    return _columns_from_message(message) or _columns_from_constraint(constraint_name)


def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """
    Always raises: DuplicateError for UNIQUE violations, RepositoryError otherwise.
    Raw driver text never ends up in the raised message.
    """
    label, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc, constraint_name)
    subject = model_name or "Record"
    log_ctx = {"model": subject, "fields": columns, "constraint": constraint_name}

    if label is UniqueConstraintError:
        # a client-level condition, not an operational one
        logger.info("mapper.duplicate_detected", extra=log_ctx)
        if columns:
            message = f"{subject} already exists for field(s): {', '.join(columns)}"
        else:
            message = f"{subject} already exists (unique constraint)"
        raise DuplicateError(message, fields=columns, constraint=constraint_name) from exc

    if label is NotNullConstraintError:
        logger.info("mapper.not_null_violation", extra=log_ctx)
        if columns:
            raise RepositoryError(
                f"Missing required field(s): {', '.join(columns)} for {subject}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise RepositoryError(f"Missing required field for {subject}") from exc

    logger.warning("mapper.unknown_integrity_error", extra={"model": subject, "constraint": constraint_name})
    raise RepositoryError(f"{subject} database integrity error.") from exc


async def _rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("mapper.rollback_failed", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ...writes...

    Any exception rolls the session back. IntegrityErrors are mapped,
    RepositoryErrors pass through, anything else becomes a generic
    RepositoryError.
    """
    try:
        yield
    except IntegrityError as exc:
        await _rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except RepositoryError:
        await _rollback(db, model_name)
        raise
    except Exception as exc:
        await _rollback(db, model_name)
        logger.exception("mapper.unexpected_db_error", extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
