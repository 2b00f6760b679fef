"""
Generic async repository on top of SQLAlchemy sessions.

Subclasses bind a model and expose domain-named methods; the shared
machinery here covers insert, primary-key lookup, single-field lookup and
ordered listing. Every database failure leaves this module as a
`RepositoryError` subclass with a message that is safe to show a client.
"""

import logging
import time
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from member_registry.database.base import Base
from member_registry.exceptions.base import NotFoundError, RepositoryError
from member_registry.exceptions.mapper import db_error_handler

ModelType = TypeVar("ModelType", bound=Base)

# integer primary keys are signed 64-bit at most; larger ids cannot match a row
MAX_ID = 2**63 - 1

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Type Parameters:
        ModelType: the mapped class this repository reads and writes.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, *, commit: bool = False, **kwargs) -> ModelType:
        """
        Insert one row built from `kwargs` and return it refreshed from the DB.

        With `commit=True` the transaction is committed before returning;
        otherwise the row is only flushed and the caller owns the transaction.

        Only key names are logged, never values.

        Raises:
            DuplicateError: a UNIQUE constraint rejected the row
            RepositoryError: any other database failure
        """
        log_ctx = {"model": self.model_name, "operation": "create"}
        logger.debug("repo.create.start", extra={**log_ctx, "provided_keys": sorted(kwargs)})

        started = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            entity = self.model(**kwargs)
            self.db.add(entity)
            # constraints fire here; the id is assigned here
            await self.db.flush()
            if commit:
                await self.db.commit()
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                **log_ctx,
                "id": getattr(entity, "id", None),
                "committed": commit,
                "duration_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read (single entity)
    # =================================================================================================================

    async def _first(self, query, operation: str) -> ModelType | None:
        try:
            result = await self.db.execute(query)
        except Exception as exc:
            logger.error(
                "repo.%s.failed", operation,
                extra={"model": self.model_name, "error": type(exc).__name__},
            )
            raise RepositoryError(f"Failed to find {self.model_name}") from exc
        return result.scalars().first()

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Primary-key lookup. None when there is no such row."""
        if not 0 <= entity_id <= MAX_ID:
            logger.debug("repo.get_by_id.out_of_range", extra={"model": self.model_name, "id": str(entity_id)})
            return None

        entity = await self._first(select(self.model).where(self.model.id == entity_id), "get_by_id")
        logger.debug(
            "repo.get_by_id",
            extra={"model": self.model_name, "id": entity_id, "found": entity is not None},
        )
        return entity

    async def get_by_id_or_raise(self, entity_id: int) -> ModelType:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")
        return entity

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        """
        First row whose `field` equals `value`, or None.

        Raises:
            RepositoryError: `field` is not an attribute of the model, or the query failed
        """
        column = getattr(self.model, field, None)
        if column is None:
            raise RepositoryError(f"{self.model_name} has no field '{field}'")

        entity = await self._first(select(self.model).where(column == value).limit(1), "find_by_field")
        logger.debug(
            "repo.find_by_field",
            extra={"model": self.model_name, "field": field, "found": entity is not None},
        )
        return entity

    # =================================================================================================================
    # Read (collections)
    # =================================================================================================================

    async def get_all(
        self,
        order_by: str | None = None,
    ) -> list[ModelType]:
        """
        All rows, ascending by `order_by` with the primary key as tie-breaker.
        An unknown `order_by` is logged and ignored (primary-key order).
        """
        order = [self.model.id]
        if order_by:
            column = getattr(self.model, order_by, None)
            if column is None:
                logger.warning(
                    "repo.get_all.ignored_order_by",
                    extra={"model": self.model_name, "order_by": order_by},
                )
            else:
                order.insert(0, column)

        query = select(self.model).order_by(*order)
        try:
            result = await self.db.execute(query)
        except Exception as exc:
            logger.error("repo.get_all.failed", extra={"model": self.model_name, "error": type(exc).__name__})
            raise RepositoryError(f"Failed to retrieve {self.model_name} entities") from exc

        entities = list(result.scalars().all())
        logger.debug("repo.get_all", extra={"model": self.model_name, "count": len(entities)})
        return entities
