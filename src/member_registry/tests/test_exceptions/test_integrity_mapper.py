from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from member_registry.exceptions.base import DuplicateError, RepositoryError
from member_registry.exceptions.integrity_classifier import (
    NotNullConstraintError,
    UniqueConstraintError,
    UnknownIntegrityError,
    classify_integrity_error,
)
from member_registry.exceptions.mapper import (
    db_error_handler,
    extract_columns_from_integrity,
    raise_mapped_integrity_error,
)


class FakePgError(Exception):
    """Stands in for a psycopg/asyncpg error: message plus pgcode and diagnostics."""

    def __init__(self, message, pgcode=None, constraint_name=None):
        super().__init__(message)
        self.pgcode = pgcode
        self.diag = SimpleNamespace(constraint_name=constraint_name)


def integrity_error(orig) -> IntegrityError:
    return IntegrityError("INSERT INTO members ...", {}, orig)


SQLITE_UNIQUE = integrity_error(Exception("UNIQUE constraint failed: members.email"))
SQLITE_NOT_NULL = integrity_error(Exception("NOT NULL constraint failed: members.name"))
PG_UNIQUE = integrity_error(FakePgError(
    'duplicate key value violates unique constraint "uq_members_name"\n'
    "DETAIL:  Key (name)=(Jane Doe) already exists.",
    pgcode="23505",
    constraint_name="uq_members_name",
))
PG_UNIQUE_NO_DETAIL = integrity_error(FakePgError(
    'duplicate key value violates unique constraint "uq_members_email"',
    pgcode="23505",
))


class TestClassifier:

    def test_sqlite_messages(self):
        assert classify_integrity_error(SQLITE_UNIQUE) == (UniqueConstraintError, None)
        assert classify_integrity_error(SQLITE_NOT_NULL) == (NotNullConstraintError, None)

    def test_postgres_pgcode(self):
        assert classify_integrity_error(PG_UNIQUE) == (UniqueConstraintError, "uq_members_name")

    def test_unknown_postgres_code(self):
        exc = integrity_error(FakePgError("check violated", pgcode="23514", constraint_name="ck_x"))
        assert classify_integrity_error(exc) == (UnknownIntegrityError, "ck_x")

    def test_unknown_message(self):
        exc = integrity_error(Exception("something odd happened"))
        assert classify_integrity_error(exc)[0] is UnknownIntegrityError


class TestColumnExtraction:

    def test_sqlite(self):
        assert extract_columns_from_integrity(SQLITE_UNIQUE) == ["email"]

    def test_postgres_detail(self):
        assert extract_columns_from_integrity(PG_UNIQUE, "uq_members_name") == ["name"]

    def test_postgres_constraint_name_fallback(self):
        assert extract_columns_from_integrity(PG_UNIQUE_NO_DETAIL) == ["email"]

    def test_nothing_recognisable(self):
        assert extract_columns_from_integrity(integrity_error(Exception("???"))) is None


class TestRaiseMapped:

    @pytest.mark.parametrize(
        "exc, field",
        [(SQLITE_UNIQUE, "email"), (PG_UNIQUE, "name"), (PG_UNIQUE_NO_DETAIL, "email")],
    )
    def test_unique_becomes_duplicate(self, exc, field):
        with pytest.raises(DuplicateError) as exc_info:
            raise_mapped_integrity_error(exc, "Member")

        assert exc_info.value.fields == [field]
        assert exc_info.value.error_code == "duplicate"

    def test_not_null_becomes_repository_error(self):
        with pytest.raises(RepositoryError) as exc_info:
            raise_mapped_integrity_error(SQLITE_NOT_NULL, "Member")

        assert not isinstance(exc_info.value, DuplicateError)
        assert exc_info.value.fields == ["name"]

    def test_unknown_message_is_not_leaked(self):
        exc = integrity_error(Exception("secret internal detail"))

        with pytest.raises(RepositoryError) as exc_info:
            raise_mapped_integrity_error(exc, "Member")

        assert exc_info.value.message == "Member database integrity error."
        assert "secret" not in exc_info.value.to_payload()["error"]


class FakeSession:
    def __init__(self):
        self.rollbacks = 0

    async def rollback(self):
        self.rollbacks += 1


class TestDbErrorHandler:

    async def test_integrity_error_rolls_back_and_maps(self):
        session = FakeSession()

        with pytest.raises(DuplicateError):
            async with db_error_handler(session, "Member"):
                raise SQLITE_UNIQUE

        assert session.rollbacks == 1

    async def test_unexpected_error_is_wrapped(self):
        session = FakeSession()

        with pytest.raises(RepositoryError) as exc_info:
            async with db_error_handler(session, "Member"):
                raise RuntimeError("socket closed")

        assert exc_info.value.message == "Failed to operate on Member"
        assert session.rollbacks == 1

    async def test_repository_error_passes_through(self):
        session = FakeSession()
        original = RepositoryError("already mapped")

        with pytest.raises(RepositoryError) as exc_info:
            async with db_error_handler(session, "Member"):
                raise original

        assert exc_info.value is original
        assert session.rollbacks == 1
