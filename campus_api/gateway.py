"""
Persistence gateway: key-based access to one ORM model.

A gateway wraps the request's ``AsyncSession`` and exposes the four
operations the CRUD engine needs.  It flushes but never commits; the
transaction boundary is owned by the ``get_db`` dependency.  Any
SQLAlchemy failure is re-raised as ``StorageError`` so the error mapper
can answer 500 without knowing about the storage layer.
"""
from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_api.database import Base
from campus_api.errors import StorageError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class RecordGateway(Generic[ModelT]):
    """Gateway for a model with a single-column primary key."""

    def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
        self.session = session
        self.model = model
        self.key_column = inspect(model).primary_key[0]

    @property
    def key_is_generated(self) -> bool:
        return self.key_column.autoincrement is True

    async def store(self, record: ModelT) -> ModelT:
        """
        Persist *record* and return the persistent instance.

        Integer keys are assigned by the database on flush.  A caller-supplied
        natural key that already exists overwrites the stored row (merge).
        """
        try:
            persisted = await self.session.merge(record)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not store {self.model.__name__}") from exc
        return persisted

    async def find_by_identity(self, key: Any) -> ModelT | None:
        try:
            return await self.session.get(self.model, key)
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not load {self.model.__name__}") from exc

    async def find_all(self) -> list[ModelT]:
        q = select(self.model)
        if self.key_is_generated:
            q = q.order_by(self.key_column)
        try:
            result = await self.session.execute(q)
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not list {self.model.__name__}") from exc
        return list(result.scalars().all())

    async def delete(self, record: ModelT) -> None:
        try:
            await self.session.delete(record)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not delete {self.model.__name__}") from exc
