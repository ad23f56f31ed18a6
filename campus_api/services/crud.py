"""
Generic CRUD engine shared by every resource.

``CrudService`` implements the five operations once, parameterized by a
``Resource`` declaration.  Authorization has already been enforced by the
router dependency by the time a method here runs.

Behavioural contract
--------------------
- ``get`` / ``update`` / ``delete`` raise ``EntityNotFoundError`` with the
  message ``"<Name> with id <key> not found"`` for an absent key.
- ``update`` is a full replacement: every mutable field takes the payload's
  value, including fields the caller omitted (which arrive as None/False).
  The identity attribute is never written.
- Lookup and mutation are not guarded against concurrent writers; a record
  deleted between ``find_by_identity`` and ``delete`` surfaces as a storage
  error from the flush.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from campus_api.errors import EntityNotFoundError
from campus_api.gateway import RecordGateway
from campus_api.resources import Resource
from campus_api.schemas import MessageResponse

logger = logging.getLogger(__name__)


class CrudService:
    def __init__(self, session: AsyncSession, resource: Resource) -> None:
        self.resource = resource
        self.gateway = RecordGateway(session, resource.model)

    async def _require(self, key: Any):
        record = await self.gateway.find_by_identity(key)
        if record is None:
            logger.info("%s with id %s not found", self.resource.name, key)
            raise EntityNotFoundError(self.resource.name, key)
        return record

    async def list_all(self) -> list:
        return await self.gateway.find_all()

    async def get(self, key: Any):
        return await self._require(key)

    async def create(self, payload: BaseModel):
        record = self.resource.model(**payload.model_dump())
        stored = await self.gateway.store(record)
        logger.info("Created %s", self.resource.name)
        return stored

    async def update(self, key: Any, payload: BaseModel):
        record = await self._require(key)
        incoming = payload.model_dump()
        for name in self.resource.mutable_fields:
            setattr(record, name, incoming[name])
        stored = await self.gateway.store(record)
        logger.info("Updated %s with id %s", self.resource.name, key)
        return stored

    async def delete(self, key: Any) -> MessageResponse:
        record = await self._require(key)
        await self.gateway.delete(record)
        logger.info("Deleted %s with id %s", self.resource.name, key)
        return MessageResponse(message=f"{self.resource.name} with id {key} deleted")
