from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from member_registry.database.session import get_async_session
from member_registry.repositories.member_repository import MemberRepository
from member_registry.services.registration_service import RegistrationService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    # Request-scoped DB session; tests override this dependency
    async for session in get_async_session():
        yield session


def get_member_repository(db: AsyncSession = Depends(get_db_session)) -> MemberRepository:
    return MemberRepository(db)


def get_registration_service(
    repository: MemberRepository = Depends(get_member_repository),
) -> RegistrationService:
    # a fresh pipeline per request, bound to that request's session
    return RegistrationService(repository)
