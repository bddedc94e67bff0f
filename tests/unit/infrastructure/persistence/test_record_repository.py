"""Tests for the scoped record repository."""

import pytest

from dynatemplates.core.exceptions import TemplateConflictError
from dynatemplates.infrastructure.persistence.repositories import TemplateRepository


@pytest.fixture
def repository(db_session):
    return TemplateRepository(db_session)


async def _seed(repository, **fields):
    defaults = {"content": "Hello", "scope": "system", "scope_id": None, "locale": "en"}
    return await repository.save(repository.create(**{**defaults, **fields}))


@pytest.mark.asyncio
async def test_save_assigns_id_and_defaults(repository):
    record = await _seed(repository, name="welcome")

    assert record.id
    assert record.engine == "njk"
    assert record.is_active is True
    assert record.created_at is not None
    assert record.is_system


@pytest.mark.asyncio
async def test_none_criterion_matches_null(repository):
    await _seed(repository, name="welcome")
    await _seed(repository, name="welcome", scope="tenant", scope_id="t1")

    system = await repository.find_one(name="welcome", scope="system", scope_id=None)
    tenant = await repository.find_one(name="welcome", scope="tenant", scope_id="t1")
    missing = await repository.find_one(name="welcome", scope="tenant", scope_id=None)

    assert system.scope == "system"
    assert tenant.scope_id == "t1"
    assert missing is None


@pytest.mark.asyncio
async def test_find_excludes_names_and_orders_by_name(repository):
    for name in ("zeta", "alpha", "internal"):
        await _seed(repository, name=name)

    records = await repository.find(exclude_names=["internal"], scope="system")

    assert [record.name for record in records] == ["alpha", "zeta"]


@pytest.mark.asyncio
async def test_clone_copies_columns_but_not_identity(repository):
    original = await _seed(repository, name="welcome", preview_context={"name": "John"})

    shadow = repository.clone(original, scope="tenant", scope_id="t1")

    assert shadow.id is None
    assert shadow.created_at is None
    assert shadow.name == "welcome"
    assert shadow.content == "Hello"
    assert shadow.scope == "tenant"
    assert shadow.preview_context == {"name": "John"}
    assert shadow.preview_context is not original.preview_context


@pytest.mark.asyncio
async def test_merge_ignores_immutable_and_unknown_fields(repository):
    record = await _seed(repository, name="welcome")
    record_id = record.id

    repository.merge(record, {"id": "other", "content": "Bye", "not_a_column": 1})

    assert record.id == record_id
    assert record.content == "Bye"
    assert not hasattr(record, "not_a_column")


@pytest.mark.asyncio
async def test_merge_skips_properties_and_class_attributes(repository):
    record = await _seed(repository, name="welcome")

    repository.merge(record, {"is_system": False, "metadata": 1, "registry": 2, "content": "Bye"})

    assert record.is_system
    assert record.content == "Bye"
    assert record.metadata != 1
    assert record.registry != 2


@pytest.mark.asyncio
async def test_duplicate_system_record_is_a_conflict(repository):
    await _seed(repository, name="welcome")

    with pytest.raises(TemplateConflictError) as exc_info:
        await _seed(repository, name="welcome")

    assert exc_info.value.status_code == 409
    assert exc_info.value.details["name"] == "welcome"


@pytest.mark.asyncio
async def test_remove(repository):
    record = await _seed(repository, name="welcome")
    record_id = record.id

    await repository.remove(record)

    assert await repository.get_by_id(record_id) is None
