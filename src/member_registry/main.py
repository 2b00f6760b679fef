"""
Application factory.

    uvicorn member_registry.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from member_registry.api.v1.error_handlers import register_exception_handlers
from member_registry.api.v1.members import router as members_router
from member_registry.config import Settings, get_settings
from member_registry.core.logging import RequestIDMiddleware, setup_logging
from member_registry.database.session import create_tables, dispose_engine
from member_registry import models  # noqa: F401 - registers Member on Base.metadata

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        if settings.DB_CREATE_TABLES:
            await create_tables()
            logger.info("database.tables_created")
        logger.info("app.startup", extra={"env": settings.ENV})
        yield
        await dispose_engine()
        logger.info("app.shutdown")

    app = FastAPI(title="Member Registry", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    app.include_router(members_router)
    register_exception_handlers(app)

    return app


app = create_app()
