from src.app.core.domain.models import Task
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.app.infrastructure.collection_names import TASKS
from src.app.infrastructure.mappers.task_mapper import TaskMapper


class TaskRepository(BaseRepository[Task]):
    """Repository for Task operations."""

    collection_name = TASKS

    def __init__(self, db: Database, mapper: TaskMapper):
        super().__init__(db, mapper)

    async def get_all(self) -> list[Task]:
        """Get every task."""
        return await self.find_all()
