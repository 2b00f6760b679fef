"""Fixtures for registration pipeline tests that run without a database."""

from collections import Counter
from typing import Any

import pytest

from member_registry.models.member import Member
from member_registry.schemas.member import MemberCreate
from member_registry.services.registration_service import RegistrationService


class FakeMemberStore:
    """
    In-memory MemberStore that records how often each operation is called.

    Set `lookup_error` / `insert_error` to an exception instance to make the
    corresponding operation fail.
    """

    def __init__(self):
        self.members: list[Member] = []
        self.calls: Counter[str] = Counter()
        self.lookup_error: Exception | None = None
        self.insert_error: Exception | None = None
        self._next_id = 1

    def add(self, name: str, email: str, phone: str | None = None) -> Member:
        member = Member(id=self._next_id, name=name, email=email, phone=phone)
        self._next_id += 1
        self.members.append(member)
        return member

    async def find_all_ordered_by_name(self) -> list[Member]:
        self.calls["find_all_ordered_by_name"] += 1
        return sorted(self.members, key=lambda m: m.name)

    async def find_by_id(self, member_id: int) -> Member | None:
        self.calls["find_by_id"] += 1
        return next((m for m in self.members if m.id == member_id), None)

    async def find_by_field(self, field: str, value: Any) -> Member | None:
        self.calls["find_by_field"] += 1
        if self.lookup_error is not None:
            raise self.lookup_error
        return next((m for m in self.members if getattr(m, field) == value), None)

    async def insert(self, candidate: MemberCreate) -> Member:
        self.calls["insert"] += 1
        if self.insert_error is not None:
            raise self.insert_error
        return self.add(candidate.name, candidate.email, candidate.phone)


@pytest.fixture
def fake_store() -> FakeMemberStore:
    return FakeMemberStore()


@pytest.fixture
def registration_service(fake_store: FakeMemberStore) -> RegistrationService:
    """A RegistrationService wired to the in-memory fake store."""
    return RegistrationService(fake_store)
