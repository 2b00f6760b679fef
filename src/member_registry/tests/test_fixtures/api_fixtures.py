"""Fixtures for HTTP-level tests."""

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from member_registry.core.dependencies import get_db_session
from member_registry.main import create_app


@pytest.fixture
def app(db_session: AsyncSession) -> FastAPI:
    """
    The application with its DB session dependency pointed at the per-test session.
    Lifespan is not run (ASGITransport does not send lifespan events).
    """
    application = create_app()

    async def _override_db_session():
        yield db_session

    application.dependency_overrides[get_db_session] = _override_db_session
    return application


@pytest.fixture
async def client(app: FastAPI):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()
