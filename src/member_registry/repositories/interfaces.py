"""
Storage collaborator consumed by the registration pipeline.

The pipeline depends on this protocol, not on SQLAlchemy. `MemberRepository`
is the real implementation and is injected by the FastAPI dependencies. Tests
plug in an in-memory fake.
"""

from typing import Any, Protocol, Sequence

from member_registry.models import Member
from member_registry.schemas.member import MemberCreate


class MemberStore(Protocol):

    async def find_all_ordered_by_name(self) -> Sequence[Member]:
        ...

    async def find_by_id(self, member_id: int) -> Member | None:
        ...

    async def find_by_field(self, field: str, value: Any) -> Member | None:
        """Return the member whose `field` equals `value`, or None when absent."""
        ...

    async def insert(self, candidate: MemberCreate) -> Member:
        """
        Durably persist `candidate` and return it with its assigned id.

        Raises:
            DuplicateError: the storage layer rejected a UNIQUE value
            RepositoryError: any other storage failure
        """
        ...
