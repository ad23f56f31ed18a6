from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, NaiveDatetime
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema whose JSON field names are the camelCase form of the Python
    attribute names (``date_added`` <-> ``dateAdded``).

    ``from_attributes`` lets FastAPI build responses straight from ORM rows;
    ``populate_by_name`` lets services construct schemas with snake_case
    keyword arguments.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Integer ranges of the BIGINT / INTEGER columns the values land in.
BigInt = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]

# Request datetimes are naive local date-times; an offset is rejected rather
# than silently dropped by the naive DateTime columns.

# Create schemas carry required fields and are read from query parameters.
# Update schemas are full-replacement bodies: an omitted field is stored as
# null (or False), never kept from the existing record.
# Response schemas list the identity first to keep a stable JSON field order.


# --- Article ---

class ArticleCreate(CamelModel):
    title: str
    url: str
    explanation: str
    email: str
    date_added: NaiveDatetime


class ArticleUpdate(CamelModel):
    title: str | None = None
    url: str | None = None
    explanation: str | None = None
    email: str | None = None
    date_added: NaiveDatetime | None = None


class ArticleResponse(CamelModel):
    id: int
    title: str | None
    url: str | None
    explanation: str | None
    email: str | None
    date_added: datetime | None


# --- HelpRequest ---

class HelpRequestCreate(CamelModel):
    requester_email: str
    team_id: str
    table_or_breakout_room: str
    request_time: NaiveDatetime
    explanation: str
    solved: bool


class HelpRequestUpdate(CamelModel):
    requester_email: str | None = None
    team_id: str | None = None
    table_or_breakout_room: str | None = None
    request_time: NaiveDatetime | None = None
    explanation: str | None = None
    solved: bool = False


class HelpRequestResponse(CamelModel):
    id: int
    requester_email: str | None
    team_id: str | None
    table_or_breakout_room: str | None
    request_time: datetime | None
    explanation: str | None
    solved: bool


# --- MenuItemReview ---

class MenuItemReviewCreate(CamelModel):
    item_id: BigInt
    reviewer_email: str
    stars: Int32
    date_reviewed: NaiveDatetime
    comments: str


class MenuItemReviewUpdate(CamelModel):
    item_id: BigInt | None = None
    reviewer_email: str | None = None
    stars: Int32 | None = None
    date_reviewed: NaiveDatetime | None = None
    comments: str | None = None


class MenuItemReviewResponse(CamelModel):
    id: int
    item_id: int | None
    reviewer_email: str | None
    stars: int | None
    date_reviewed: datetime | None
    comments: str | None


# --- RecommendationRequest ---

class RecommendationRequestCreate(CamelModel):
    requester_email: str
    professor_email: str
    explanation: str
    date_requested: NaiveDatetime
    date_needed: NaiveDatetime
    done: bool


class RecommendationRequestUpdate(CamelModel):
    requester_email: str | None = None
    professor_email: str | None = None
    explanation: str | None = None
    date_requested: NaiveDatetime | None = None
    date_needed: NaiveDatetime | None = None
    done: bool = False


class RecommendationRequestResponse(CamelModel):
    id: int
    requester_email: str | None
    professor_email: str | None
    explanation: str | None
    date_requested: datetime | None
    date_needed: datetime | None
    done: bool


# --- UCSBDiningCommonsMenuItem ---

class DiningCommonsMenuItemCreate(CamelModel):
    dining_commons_code: str
    name: str
    station: str


class DiningCommonsMenuItemUpdate(CamelModel):
    dining_commons_code: str | None = None
    name: str | None = None
    station: str | None = None


class DiningCommonsMenuItemResponse(CamelModel):
    id: int
    dining_commons_code: str | None
    name: str | None
    station: str | None


# --- UCSBOrganization ---

class OrganizationCreate(CamelModel):
    org_code: str
    org_translation_short: str
    org_translation: str
    inactive: bool


class OrganizationUpdate(CamelModel):
    org_translation_short: str | None = None
    org_translation: str | None = None
    inactive: bool = False


class OrganizationResponse(CamelModel):
    org_code: str
    org_translation_short: str | None
    org_translation: str | None
    inactive: bool


# --- Envelopes ---

class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    type: str = Field(..., description="Machine-readable error type")
    message: str = Field(..., description="Human-readable error message")
    details: Any | None = None


class CurrentUserResponse(CamelModel):
    logged_in: bool
    subject: str | None = None
    roles: list[str] = []
    admin: bool = False
