import inspect

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_api.database import get_db
from campus_api.dependencies import require
from campus_api.resources import Operation, Resource
from campus_api.schemas import MessageResponse
from campus_api.services.crud import CrudService

# Generated keys are BIGINT; anything outside that range can never match.
KEY_MIN = -(2**63)
KEY_MAX = 2**63 - 1


def _located(exc: ValidationError, location: str) -> list[dict]:
    return [
        {**error, "loc": (location, *error["loc"])}
        for error in exc.errors(include_url=False)
    ]


def query_model(schema: type[BaseModel]):
    """
    Build a dependency that reads *schema*'s fields from query parameters.

    Each field becomes a keyword-only ``Query`` parameter named by its JSON
    alias, so ``POST /post?dateAdded=...`` validates exactly like a body
    would and a missing field is a request validation error.
    """
    params = []
    for name, info in schema.model_fields.items():
        default = ... if info.is_required() else info.default
        params.append(
            inspect.Parameter(
                name,
                inspect.Parameter.KEYWORD_ONLY,
                default=Query(default, alias=info.alias or name),
                annotation=info.annotation,
            )
        )

    async def dependency(**values):
        # Field constraints (ranges) live on the schema, not the query params.
        try:
            return schema(**values)
        except ValidationError as exc:
            raise RequestValidationError(_located(exc, "query"))

    dependency.__signature__ = inspect.Signature(params)
    return dependency


def json_body(schema: type[BaseModel], guard):
    """
    Build a dependency that parses the JSON request body into *schema*.

    FastAPI parses declared body parameters before resolving any dependency,
    so the body is read here instead, after *guard* has admitted the caller.
    """

    async def dependency(request: Request, _principal=Depends(guard)):
        try:
            raw = await request.json()
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for a body that is not UTF-8
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error",
                  "input": {}, "ctx": {"error": str(exc)}}]
            )
        try:
            return schema.model_validate(raw)
        except ValidationError as exc:
            raise RequestValidationError(_located(exc, "body"))

    return dependency


def build_crud_router(resource: Resource) -> APIRouter:
    """Mount list/get/create/update/delete for *resource* under its base path."""
    router = APIRouter(prefix=resource.path, tags=[resource.tag or resource.name])

    def key_query():
        bounds = {"ge": KEY_MIN, "le": KEY_MAX} if resource.key_type is int else {}
        return Query(..., alias=resource.key_param, description=f"{resource.name} identity", **bounds)

    def guard(operation: Operation):
        return require(resource.required(operation))

    def gate(operation: Operation):
        return [Depends(guard(operation))]

    @router.get(
        "/all",
        response_model=list[resource.response_schema],
        summary=f"List all {resource.name} records",
        dependencies=gate(Operation.LIST),
    )
    async def list_records(db: AsyncSession = Depends(get_db)):
        return await CrudService(db, resource).list_all()

    @router.get(
        "",
        response_model=resource.response_schema,
        summary=f"Get a single {resource.name}",
        dependencies=gate(Operation.GET),
    )
    async def get_record(
        key: resource.key_type = key_query(),
        db: AsyncSession = Depends(get_db),
    ):
        return await CrudService(db, resource).get(key)

    @router.post(
        "/post",
        response_model=resource.response_schema,
        summary=f"Create a new {resource.name}",
        dependencies=gate(Operation.CREATE),
    )
    async def create_record(
        payload: resource.create_schema = Depends(query_model(resource.create_schema)),
        db: AsyncSession = Depends(get_db),
    ):
        return await CrudService(db, resource).create(payload)

    update_guard = guard(Operation.UPDATE)

    @router.put(
        "",
        response_model=resource.response_schema,
        summary=f"Update a single {resource.name}",
        dependencies=[Depends(update_guard)],
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {
                    "application/json": {
                        "schema": resource.update_schema.model_json_schema(by_alias=True)
                    }
                },
            }
        },
    )
    async def update_record(
        payload: resource.update_schema = Depends(json_body(resource.update_schema, update_guard)),
        key: resource.key_type = key_query(),
        db: AsyncSession = Depends(get_db),
    ):
        return await CrudService(db, resource).update(key, payload)

    @router.delete(
        "",
        response_model=MessageResponse,
        summary=f"Delete a {resource.name}",
        dependencies=gate(Operation.DELETE),
    )
    async def delete_record(
        key: resource.key_type = key_query(),
        db: AsyncSession = Depends(get_db),
    ):
        return await CrudService(db, resource).delete(key)

    return router
