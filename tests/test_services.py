"""
Direct service-layer tests: exercise the CRUD engine, the persistence
gateway and the authorization gate without HTTP overhead.
"""
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_api.errors import EntityNotFoundError, ForbiddenError, StorageError
from campus_api.gateway import RecordGateway
from campus_api.models import Article, MenuItemReview, Organization
from campus_api.resources import (
    ARTICLES,
    DEFAULT_PERMISSIONS,
    MENU_ITEM_REVIEWS,
    ORGANIZATIONS,
    RESOURCES,
    Operation,
)
from campus_api.schemas import (
    ArticleCreate,
    ArticleUpdate,
    MenuItemReviewCreate,
    MenuItemReviewUpdate,
    OrganizationCreate,
)
from campus_api.security import (
    ANONYMOUS,
    Capability,
    Principal,
    authorize,
    create_access_token,
    principal_from_token,
)
from campus_api.services.crud import CrudService


def _article_create(**overrides) -> ArticleCreate:
    data = dict(
        title="Test Article",
        url="http://test.com",
        explanation="Test Explanation",
        email="test@email.com",
        date_added=datetime(2022, 1, 3),
    )
    data.update(overrides)
    return ArticleCreate(**data)


# ---------------------------------------------------------------------------
# RecordGateway
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_gateway_store_assigns_identity(db_session: AsyncSession):
    gateway = RecordGateway(db_session, Article)
    stored = await gateway.store(Article(title="A"))
    assert stored.id is not None
    found = await gateway.find_by_identity(stored.id)
    assert found is not None
    assert found.id == stored.id


@pytest.mark.asyncio
async def test_gateway_find_missing_returns_none(db_session: AsyncSession):
    assert await RecordGateway(db_session, Article).find_by_identity(42) is None


@pytest.mark.asyncio
async def test_gateway_find_all_in_insertion_order(db_session: AsyncSession):
    gateway = RecordGateway(db_session, Article)
    for title in ("one", "two", "three"):
        await gateway.store(Article(title=title))
    assert [a.title for a in await gateway.find_all()] == ["one", "two", "three"]


@pytest.mark.asyncio
async def test_gateway_natural_key_is_not_generated(db_session: AsyncSession):
    assert RecordGateway(db_session, Article).key_is_generated is True
    assert RecordGateway(db_session, Organization).key_is_generated is False


@pytest.mark.asyncio
async def test_gateway_delete(db_session: AsyncSession):
    gateway = RecordGateway(db_session, Organization)
    stored = await gateway.store(Organization(org_code="ROW", inactive=False))
    await gateway.delete(stored)
    assert await gateway.find_by_identity("ROW") is None


class _BrokenSession:
    """Stands in for a session whose database connection has gone away."""

    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def get(self, *args, **kwargs):
        self._fail()

    async def execute(self, *args, **kwargs):
        self._fail()

    async def merge(self, *args, **kwargs):
        self._fail()

    async def delete(self, *args, **kwargs):
        self._fail()


@pytest.mark.asyncio
async def test_gateway_wraps_storage_failures():
    gateway = RecordGateway(_BrokenSession(), Article)
    with pytest.raises(StorageError):
        await gateway.find_by_identity(1)
    with pytest.raises(StorageError):
        await gateway.find_all()
    with pytest.raises(StorageError):
        await gateway.store(Article(title="A"))
    with pytest.raises(StorageError):
        await gateway.delete(Article(id=1))


# ---------------------------------------------------------------------------
# CrudService
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_service_create_and_get(db_session: AsyncSession):
    service = CrudService(db_session, ARTICLES)
    created = await service.create(_article_create())
    fetched = await service.get(created.id)
    assert fetched.title == "Test Article"
    assert fetched.date_added == datetime(2022, 1, 3)


@pytest.mark.asyncio
async def test_service_get_missing_raises_not_found(db_session: AsyncSession):
    with pytest.raises(EntityNotFoundError) as exc_info:
        await CrudService(db_session, ARTICLES).get(7)
    assert exc_info.value.message == "Articles with id 7 not found"
    assert exc_info.value.status_code == 404
    assert exc_info.value.error_type == "EntityNotFoundException"


@pytest.mark.asyncio
async def test_service_update_is_full_replacement(db_session: AsyncSession):
    service = CrudService(db_session, MENU_ITEM_REVIEWS)
    created = await service.create(
        MenuItemReviewCreate(
            item_id=1,
            reviewer_email="reviewer@example.com",
            stars=5,
            date_reviewed=datetime(2022, 1, 3),
            comments="Delicious!",
        )
    )
    original_id = created.id

    updated = await service.update(original_id, MenuItemReviewUpdate(stars=2))
    assert updated.id == original_id
    assert updated.stars == 2
    assert updated.item_id is None
    assert updated.reviewer_email is None
    assert updated.date_reviewed is None
    assert updated.comments is None


@pytest.mark.asyncio
async def test_service_update_missing_raises(db_session: AsyncSession):
    with pytest.raises(EntityNotFoundError) as exc_info:
        await CrudService(db_session, ARTICLES).update(67, ArticleUpdate())
    assert str(exc_info.value) == "Articles with id 67 not found"


@pytest.mark.asyncio
async def test_service_delete_returns_message(db_session: AsyncSession):
    service = CrudService(db_session, ORGANIZATIONS)
    await service.create(
        OrganizationCreate(
            org_code="SKY",
            org_translation_short="Skydiving",
            org_translation="UCSB Skydiving Club",
            inactive=True,
        )
    )
    result = await service.delete("SKY")
    assert result.message == "UCSBOrganization with id SKY deleted"
    with pytest.raises(EntityNotFoundError):
        await service.get("SKY")


@pytest.mark.asyncio
async def test_service_list_all(db_session: AsyncSession):
    service = CrudService(db_session, ARTICLES)
    await service.create(_article_create(title="First"))
    await service.create(_article_create(title="Second"))
    assert [a.title for a in await service.list_all()] == ["First", "Second"]


def test_mutable_fields_exclude_identity():
    for resource in RESOURCES:
        assert "id" not in resource.mutable_fields
        assert "org_code" not in resource.mutable_fields
    assert ORGANIZATIONS.mutable_fields == ("org_translation_short", "org_translation", "inactive")


def test_default_permission_matrix():
    for resource in RESOURCES:
        assert resource.permissions == DEFAULT_PERMISSIONS
    assert ARTICLES.required(Operation.LIST) is Capability.AUTHENTICATED
    assert ARTICLES.required(Operation.GET) is Capability.AUTHENTICATED
    assert ARTICLES.required(Operation.CREATE) is Capability.ELEVATED
    assert ARTICLES.required(Operation.UPDATE) is Capability.ELEVATED
    assert ARTICLES.required(Operation.DELETE) is Capability.ELEVATED


# ---------------------------------------------------------------------------
# Authorization gate
# ---------------------------------------------------------------------------

USER = Principal(subject="student@ucsb.edu", roles=frozenset({"USER"}))
ADMIN = Principal(subject="admin@ucsb.edu", roles=frozenset({"USER", "ADMIN"}))


@pytest.mark.parametrize("principal", [ANONYMOUS, USER, ADMIN])
def test_capability_none_allows_everyone(principal):
    authorize(principal, Capability.NONE)


def test_anonymous_denied_above_none():
    for capability in (Capability.AUTHENTICATED, Capability.ELEVATED):
        with pytest.raises(ForbiddenError):
            authorize(ANONYMOUS, capability)


def test_user_allowed_authenticated_denied_elevated():
    authorize(USER, Capability.AUTHENTICATED)
    with pytest.raises(ForbiddenError):
        authorize(USER, Capability.ELEVATED)


def test_admin_allowed_everything():
    authorize(ADMIN, Capability.AUTHENTICATED)
    authorize(ADMIN, Capability.ELEVATED)


def test_principal_from_token_round_trip():
    principal = principal_from_token(create_access_token("admin@ucsb.edu", ["USER", "ADMIN"]))
    assert principal.subject == "admin@ucsb.edu"
    assert principal.roles == frozenset({"USER", "ADMIN"})
    assert principal.elevated


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_principal_from_bad_token_is_anonymous(token):
    assert principal_from_token(token) == ANONYMOUS


def test_principal_from_expired_token_is_anonymous():
    token = create_access_token("student@ucsb.edu", ["USER"], expires_minutes=-5)
    assert principal_from_token(token) == ANONYMOUS
