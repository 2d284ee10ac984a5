from contextlib import aclosing

from bson import ObjectId

from src.app.core.domain.models import GroupedTasksByDate, Task, TaskRequest
from src.app.core.services.grouping import GroupingEngine
from src.app.infrastructure.join_specs import tasks_with_project_and_client
from src.app.infrastructure.task_repository import TaskRepository
from src.shared.database.identifiers import parse_object_id
from src.shared.database.joiner import RelationalJoiner
from src.shared.exceptions import RecordNotFound
from src.shared.timestamps import utc_now


class TaskService:
    """Service for handling Task business logic."""

    def __init__(
        self,
        repository: TaskRepository,
        joiner: RelationalJoiner,
        grouping_engine: GroupingEngine,
    ):
        self.repository = repository
        self.joiner = joiner
        self.grouping_engine = grouping_engine

    async def create_task(self, request: TaskRequest) -> Task:
        """
        Create a new task.

        The project reference is only checked for shape: a task pointing at a
        missing project is kept and shows up without project details in the
        grouped view.
        """
        now = utc_now()
        task = Task(
            id=str(ObjectId()),
            name=request.name,
            initial_time=request.initial_time,
            end_time=request.end_time,
            project=self._project_id(request),
            created_at=now,
            updated_at=now,
        )
        await self.repository.add(task)
        return task

    async def update_task(self, task_id: str, request: TaskRequest) -> Task:
        """Replace the editable fields of a task."""
        existing = await self.get_task(task_id)
        updated = existing.model_copy(
            update={
                "name": request.name,
                "initial_time": request.initial_time,
                "end_time": request.end_time,
                "project": self._project_id(request),
                "updated_at": utc_now(),
            }
        )
        task = await self.repository.replace(updated)
        if task is None:
            raise RecordNotFound("Task", task_id)
        return task

    async def get_task(self, task_id: str) -> Task:
        """Get a task by ID."""
        task = await self.repository.get_by_id(task_id)
        if not task:
            raise RecordNotFound("Task", task_id)
        return task

    async def list_tasks(self) -> list[Task]:
        return await self.repository.get_all()

    async def delete_task(self, task_id: str) -> None:
        if not await self.repository.delete_by_id(task_id):
            raise RecordNotFound("Task", task_id)

    async def delete_all_tasks(self) -> int:
        return await self.repository.delete_all()

    async def group_tasks_by_date(self) -> list[GroupedTasksByDate]:
        """
        Tasks grouped by the UTC day they started, most recent day first.

        Raises:
            StoreQueryFailed: If the join cannot be executed or fails midway
        """
        async with aclosing(self.joiner.stream(tasks_with_project_and_client())) as documents:
            return await self.grouping_engine.group_tasks_by_date(documents)

    @staticmethod
    def _project_id(request: TaskRequest) -> str | None:
        if request.project is None:
            return None
        return str(parse_object_id(request.project))
