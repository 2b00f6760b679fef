"""
Cross-record uniqueness check for a structurally valid candidate.
"""

import logging
from typing import Sequence

from member_registry.models import Member
from member_registry.repositories.interfaces import MemberStore
from member_registry.schemas.member import MemberCreate
from .model_inspection import get_single_unique_columns

logger = logging.getLogger(__name__)

# Read from the table definition so a new unique column is checked without code changes.
MEMBER_UNIQUE_FIELDS: tuple[str, ...] = get_single_unique_columns(Member)


def conflict_label(field: str) -> str:
    """'email' -> 'Email'; the label clients see in "<Label> taken"."""
    return field.capitalize()


class UniquenessChecker:
    """
    Looks up each unique field of the candidate in the store.

    Every field is queried, even after an earlier one conflicts, so the
    caller can report all conflicts at once. A lookup that finds nothing is
    the normal, passing case. Store errors propagate to the caller.
    """

    def __init__(self, store: MemberStore, fields: Sequence[str] = MEMBER_UNIQUE_FIELDS):
        self.store = store
        self.fields = tuple(fields)

    async def check(self, candidate: MemberCreate) -> frozenset[str]:
        conflicts: set[str] = set()

        for field in self.fields:
            value = getattr(candidate, field)
            if value is None:
                continue
            existing = await self.store.find_by_field(field, value)
            if existing is not None:
                conflicts.add(conflict_label(field))

        if conflicts:
            logger.debug("uniqueness.conflicts", extra={"conflict_fields": sorted(conflicts)})

        return frozenset(conflicts)
