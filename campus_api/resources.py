"""
Resource declarations.

Every managed record category is one ``Resource`` value: the ORM model,
its schemas, the URL it is mounted at, the query parameter that carries
its identity, the display name used in messages, and the capability each
operation demands.  The CRUD engine and router factory are generic over
these values; adding a resource means adding a declaration here.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel

from campus_api import models, schemas
from campus_api.database import Base
from campus_api.security import Capability


class Operation(str, enum.Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


DEFAULT_PERMISSIONS: Mapping[Operation, Capability] = MappingProxyType({
    Operation.LIST: Capability.AUTHENTICATED,
    Operation.GET: Capability.AUTHENTICATED,
    Operation.CREATE: Capability.ELEVATED,
    Operation.UPDATE: Capability.ELEVATED,
    Operation.DELETE: Capability.ELEVATED,
})


@dataclass(frozen=True)
class Resource:
    name: str
    path: str
    model: type[Base]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    response_schema: type[BaseModel]
    key_param: str = "id"
    key_type: type = int
    tag: str | None = None
    permissions: Mapping[Operation, Capability] = field(default_factory=lambda: DEFAULT_PERMISSIONS)

    def required(self, operation: Operation) -> Capability:
        return self.permissions[operation]

    @property
    def mutable_fields(self) -> tuple[str, ...]:
        """Attribute names an update replaces; identity is never among them."""
        return tuple(self.update_schema.model_fields)


ARTICLES = Resource(
    name="Articles",
    path="/api/articles",
    model=models.Article,
    create_schema=schemas.ArticleCreate,
    update_schema=schemas.ArticleUpdate,
    response_schema=schemas.ArticleResponse,
)

HELP_REQUESTS = Resource(
    name="HelpRequest",
    path="/api/helprequests",
    model=models.HelpRequest,
    create_schema=schemas.HelpRequestCreate,
    update_schema=schemas.HelpRequestUpdate,
    response_schema=schemas.HelpRequestResponse,
)

MENU_ITEM_REVIEWS = Resource(
    name="MenuItemReview",
    path="/api/menuitemreview",
    model=models.MenuItemReview,
    create_schema=schemas.MenuItemReviewCreate,
    update_schema=schemas.MenuItemReviewUpdate,
    response_schema=schemas.MenuItemReviewResponse,
)

RECOMMENDATION_REQUESTS = Resource(
    name="RecommendationRequest",
    path="/api/recommendationrequests",
    model=models.RecommendationRequest,
    create_schema=schemas.RecommendationRequestCreate,
    update_schema=schemas.RecommendationRequestUpdate,
    response_schema=schemas.RecommendationRequestResponse,
)

DINING_COMMONS_MENU_ITEMS = Resource(
    name="UCSBDiningCommonsMenuItem",
    path="/api/ucsb-dining-commons-menu-items",
    model=models.DiningCommonsMenuItem,
    create_schema=schemas.DiningCommonsMenuItemCreate,
    update_schema=schemas.DiningCommonsMenuItemUpdate,
    response_schema=schemas.DiningCommonsMenuItemResponse,
)

ORGANIZATIONS = Resource(
    name="UCSBOrganization",
    path="/api/ucsborganization",
    model=models.Organization,
    create_schema=schemas.OrganizationCreate,
    update_schema=schemas.OrganizationUpdate,
    response_schema=schemas.OrganizationResponse,
    key_param="orgCode",
    key_type=str,
)

RESOURCES: tuple[Resource, ...] = (
    ARTICLES,
    HELP_REQUESTS,
    MENU_ITEM_REVIEWS,
    RECOMMENDATION_REQUESTS,
    DINING_COMMONS_MENU_ITEMS,
    ORGANIZATIONS,
)
