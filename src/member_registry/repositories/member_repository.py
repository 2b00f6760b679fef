"""
Member repository: the SQLAlchemy implementation of the `MemberStore` collaborator.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
import logging

from member_registry.models.member import Member
from member_registry.schemas.member import MemberCreate
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class MemberRepository(BaseRepository[Member]):
    """
    Repository for Member entity operations.

    Inherits lookup and create helpers from `BaseRepository` and exposes
    them under the names the registration pipeline consumes.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Member, db)

    async def find_all_ordered_by_name(self) -> Sequence[Member]:
        """All members, sorted by name ascending."""
        return await self.get_all(order_by="name")

    async def find_by_id(self, member_id: int) -> Member | None:
        return await self.get_by_id(member_id)

    async def find_by_field(self, field: str, value: Any) -> Member | None:
        """
        Look up a member by one field value.

        Returns None when no member matches. Only a failing query raises.
        """
        if field == "email" and isinstance(value, str):
            value = value.strip().lower()
        return await super().find_by_field(field, value)

    async def insert(self, candidate: MemberCreate) -> Member:
        """
        Persist a validated candidate and commit.

        Returns:
            The stored Member with its assigned id.

        Raises:
            DuplicateError: the UNIQUE constraint on name/email rejected the row
            RepositoryError: For any unexpected database errors
        """
        logger.info("repo.insert.start", extra={"model": "Member"})

        return await self.create(
            commit=True,
            name=candidate.name,
            email=candidate.email,
            phone=candidate.phone,
        )
