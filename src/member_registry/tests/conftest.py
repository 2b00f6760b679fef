"""
Core pytest configuration for the entire test suite.

Only the essentials live here: early logging tuning, application logging for
the session, and the per-test database engine/session.

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/service_fixtures.py
- tests/test_fixtures/api_fixtures.py
"""

from __future__ import annotations

import os
import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block above the third-party imports so collection stays quiet.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "aiosqlite",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.pool import StaticPool

from member_registry.database.base import Base
from member_registry import models  # noqa: F401 - import to register models with Base.metadata
from member_registry.config import Settings
from member_registry.core.logging.builder import setup_logging

logger = logging.getLogger(__name__)

# -------------------------------
# Settings used by the whole session
# -------------------------------
TEST_SETTINGS = Settings(
    ENV="testing",
    LOG_LEVEL="DEBUG",
    LOG_FORMAT="text",
    LOG_TO_STDOUT=True,
    DATABASE_URL_OVERRIDE="sqlite+aiosqlite:///:memory:",
)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the application's dictConfig logging once for the test session,
    so formatters and filters (request_id, redact) behave as in the app.
    """
    setup_logging(TEST_SETTINGS)
    yield


@pytest.fixture
def restore_logging():
    """
    For tests that install their own logging config (tmp dirs, captured
    streams): put the session config back afterwards.
    """
    yield
    setup_logging(TEST_SETTINGS)


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

def get_test_database_url() -> str:
    """
    1. `TEST_DATABASE_URL` environment variable (CI override, e.g. a Postgres test DB)
    2. in-memory SQLite, so tests run without a database server
    """
    return os.getenv("TEST_DATABASE_URL") or TEST_SETTINGS.DATABASE_URL


TEST_DATABASE_URL = get_test_database_url()


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh engine and schema per test.

    For in-memory SQLite a StaticPool keeps the single connection (and with it
    the database) alive for the whole test.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    # The repository commits on insert, so isolation comes from the per-test schema.
    maker = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session


# Fixtures from test_fixtures/, registered globally
from .test_fixtures.repository_fixtures import (  # noqa: E402
    member_repository,
    sample_member_data,
    create_member,
)
from .test_fixtures.service_fixtures import (  # noqa: E402
    fake_store,
    registration_service,
)
from .test_fixtures.api_fixtures import (  # noqa: E402
    app,
    client,
)
