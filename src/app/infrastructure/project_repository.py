from src.app.core.domain.models import Project
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.app.infrastructure.collection_names import PROJECTS
from src.app.infrastructure.mappers.project_mapper import ProjectMapper


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project operations."""

    collection_name = PROJECTS

    def __init__(self, db: Database, mapper: ProjectMapper):
        super().__init__(db, mapper)

    async def get_all(self) -> list[Project]:
        """Get every project."""
        return await self.find_all()
