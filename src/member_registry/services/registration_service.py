"""
Member registration pipeline.

    FieldValidator -> UniquenessChecker -> MemberStore.insert

The first failing stage ends the attempt and decides the Outcome. Structural
checks run first because they are local and cheap. Uniqueness is fully
resolved before any write, so a rejected attempt never leaves a partial row
behind.

The uniqueness lookups and the insert are separate steps with nothing
locking the gap between them. Two concurrent registrations of the same email
can both pass the lookup. The UNIQUE constraints on the `members` table
reject the second insert, and that `DuplicateError` is reported as a
conflict as well.
"""

import logging
from typing import Any

from member_registry.exceptions.base import DuplicateError, RepositoryError
from member_registry.repositories.interfaces import MemberStore
from member_registry.validators.field_validator import FieldValidator
from member_registry.validators.uniqueness_checker import UniquenessChecker, conflict_label
from .outcomes import (
    FieldViolations,
    Outcome,
    Success,
    UnexpectedFailure,
    UniqueConflict,
)

logger = logging.getLogger(__name__)


class RegistrationService:

    def __init__(
        self,
        store: MemberStore,
        field_validator: FieldValidator | None = None,
        uniqueness_checker: UniquenessChecker | None = None,
    ):
        self.store = store
        self.field_validator = field_validator or FieldValidator()
        self.uniqueness_checker = uniqueness_checker or UniquenessChecker(store)

    async def register(self, payload: Any) -> Outcome:
        """
        Run one registration attempt for a raw submitted payload.

        Never raises. Every failure comes back as an Outcome variant.
        """
        candidate, violations = self.field_validator.inspect(payload)
        if violations:
            logger.info(
                "registration.invalid_fields",
                extra={"fields": sorted(v.field for v in violations)},
            )
            return FieldViolations(violations)

        try:
            conflicts = await self.uniqueness_checker.check(candidate)
        except RepositoryError as exc:
            logger.error("registration.lookup_failed", extra={"error": exc.message})
            return UnexpectedFailure(exc.message)
        except Exception as exc:
            logger.exception("registration.lookup_failed")
            return UnexpectedFailure(str(exc))

        if conflicts:
            logger.info("registration.conflict", extra={"conflict_fields": sorted(conflicts)})
            return UniqueConflict(conflicts)

        try:
            member = await self.store.insert(candidate)
        except DuplicateError as exc:
            # lost the race to a concurrent registration; the DB constraint caught it
            fields = frozenset(conflict_label(f) for f in exc.fields or ())
            if fields:
                logger.info(
                    "registration.conflict",
                    extra={"conflict_fields": sorted(fields), "source": "storage"},
                )
                return UniqueConflict(fields)
            logger.error("registration.insert_failed", extra={"error": exc.message})
            return UnexpectedFailure(exc.message)
        except RepositoryError as exc:
            logger.error("registration.insert_failed", extra={"error": exc.message})
            return UnexpectedFailure(exc.message)
        except Exception as exc:
            logger.exception("registration.insert_failed")
            return UnexpectedFailure(str(exc))

        logger.info("registration.success", extra={"member_id": member.id})
        return Success(member)
