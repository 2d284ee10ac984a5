import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from src.app.core.domain.models import Task, TaskRequest
from src.app.core.services.task_service import TaskService
from src.app.infrastructure.mappers.task_mapper import TaskMapper
from src.app.infrastructure.task_repository import TaskRepository
from src.shared.database.joiner import RelationalJoiner
from src.shared.exceptions import InvalidIdentifier, RecordNotFound, StoreQueryFailed
from src.shared.timestamps import utc_now
from tests.documents import at, joined_task_document
from tests.fakes import BlockingCursor, FakeCollection, FakeDatabase, FakeJoiner


def create_task(**overrides) -> Task:
    fields = dict(
        id=str(ObjectId()),
        name="Landing page",
        initial_time=at("2024-01-02T09:00:00Z"),
        end_time=at("2024-01-02T10:00:00Z"),
        project=None,
        created_at=at("2024-01-02T10:00:00Z"),
        updated_at=at("2024-01-02T10:00:00Z"),
    )
    fields.update(overrides)
    return Task(**fields)


@pytest.fixture
def repository():
    return AsyncMock(spec=TaskRepository)


@pytest.fixture
def task_service(repository, grouping_engine):
    return TaskService(repository=repository, joiner=FakeJoiner(), grouping_engine=grouping_engine)


@pytest.mark.asyncio
async def test_get_task_raises_not_found(task_service, repository):
    repository.get_by_id.return_value = None

    with pytest.raises(RecordNotFound) as exc_info:
        await task_service.get_task(str(ObjectId()))

    assert exc_info.value.entity_name == "Task"


@pytest.mark.asyncio
async def test_invalid_identifier_fails_before_any_store_call(grouping_engine):
    # Arrange
    db = MagicMock()
    service = TaskService(
        repository=TaskRepository(db=db, mapper=TaskMapper()),
        joiner=FakeJoiner(),
        grouping_engine=grouping_engine,
    )

    # Act & Assert
    with pytest.raises(InvalidIdentifier):
        await service.get_task("not-a-hex-id")
    with pytest.raises(InvalidIdentifier):
        await service.delete_task("not-a-hex-id")
    db.collection.assert_not_called()


@pytest.mark.asyncio
async def test_create_task(task_service, repository):
    # Arrange
    project_id = str(ObjectId())
    request = TaskRequest(
        name="Landing page",
        initial_time="2024-01-02T09:00:00Z",
        end_time="2024-01-02T10:00:00Z",
        project=project_id.upper(),
    )

    # Act
    task = await task_service.create_task(request)

    # Assert
    repository.add.assert_awaited_once_with(task)
    assert task.project == project_id
    assert task.duration_seconds == 3600
    assert task.created_at == task.updated_at


@pytest.mark.asyncio
async def test_create_task_with_malformed_project(task_service, repository):
    request = TaskRequest(
        name="Landing page",
        initial_time="2024-01-02T09:00:00Z",
        end_time="2024-01-02T10:00:00Z",
        project="P1",
    )

    with pytest.raises(InvalidIdentifier):
        await task_service.create_task(request)

    repository.add.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_task_keeps_identity_and_creation_time(task_service, repository):
    # Arrange
    existing = create_task()
    repository.get_by_id.return_value = existing
    repository.replace.side_effect = lambda task: task
    request = TaskRequest(
        name="Landing page v2",
        initial_time="2024-01-02T09:00:00Z",
        end_time="2024-01-02T11:00:00Z",
    )

    # Act
    updated = await task_service.update_task(existing.id, request)

    # Assert
    assert updated.id == existing.id
    assert updated.created_at == existing.created_at
    assert updated.name == "Landing page v2"
    assert updated.duration_seconds == 7200
    assert updated.updated_at >= existing.updated_at
    assert updated.updated_at <= utc_now()


@pytest.mark.asyncio
async def test_update_task_deleted_meanwhile(task_service, repository):
    existing = create_task()
    repository.get_by_id.return_value = existing
    repository.replace.return_value = None
    request = TaskRequest(name="x", initial_time="2024-01-02T09:00:00Z", end_time="2024-01-02T09:01:00Z")

    with pytest.raises(RecordNotFound):
        await task_service.update_task(existing.id, request)


@pytest.mark.asyncio
async def test_delete_task_raises_not_found(task_service, repository):
    repository.delete_by_id.return_value = False

    with pytest.raises(RecordNotFound):
        await task_service.delete_task(str(ObjectId()))


@pytest.mark.asyncio
async def test_group_tasks_by_date_uses_task_join(repository, grouping_engine):
    # Arrange
    joiner = FakeJoiner([
        joined_task_document("Task A", "2024-01-02T09:00:00Z", "2024-01-02T10:00:00Z", project_name="P1"),
        joined_task_document("Task C", "2024-01-01T08:00:00Z", "2024-01-01T09:00:00Z"),
    ])
    service = TaskService(repository=repository, joiner=joiner, grouping_engine=grouping_engine)

    # Act
    groups = await service.group_tasks_by_date()

    # Assert
    assert [group.date for group in groups] == ["2024-01-02", "2024-01-01"]
    assert joiner.specs[0].source == "tasks"
    assert len(joiner.specs[0].lookups) == 2


@pytest.mark.asyncio
async def test_group_tasks_by_date_store_failure(repository, grouping_engine):
    joiner = FakeJoiner(
        [joined_task_document("Task A", "2024-01-02T09:00:00Z", "2024-01-02T10:00:00Z")],
        error=StoreQueryFailed("aggregate tasks", ConnectionError("reset")),
    )
    service = TaskService(repository=repository, joiner=joiner, grouping_engine=grouping_engine)

    with pytest.raises(StoreQueryFailed):
        await service.group_tasks_by_date()


@pytest.mark.asyncio
async def test_cancelled_grouping_returns_nothing_and_closes_cursor(repository, grouping_engine):
    # Arrange
    cursor = BlockingCursor([joined_task_document("Task A", "2024-01-02T09:00:00Z", "2024-01-02T10:00:00Z")])
    joiner = RelationalJoiner(FakeDatabase({"tasks": FakeCollection(cursor)}))
    service = TaskService(repository=repository, joiner=joiner, grouping_engine=grouping_engine)
    grouping = asyncio.create_task(service.group_tasks_by_date())
    await cursor.waiting.wait()

    # Act
    grouping.cancel()

    # Assert
    with pytest.raises(asyncio.CancelledError):
        await grouping
    assert cursor.closed
