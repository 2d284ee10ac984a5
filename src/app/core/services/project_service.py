from contextlib import aclosing

from bson import ObjectId

from src.app.core.domain.models import ClientProjectGroup, Project, ProjectRequest
from src.app.core.services.grouping import GroupingEngine
from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.join_specs import projects_with_client
from src.app.infrastructure.project_repository import ProjectRepository
from src.shared.database.identifiers import parse_object_id
from src.shared.database.joiner import RelationalJoiner
from src.shared.exceptions import RecordNotFound
from src.shared.timestamps import utc_now


class ProjectService:
    """Service for handling Project business logic."""

    def __init__(
        self,
        repository: ProjectRepository,
        client_repository: ClientRepository,
        joiner: RelationalJoiner,
        grouping_engine: GroupingEngine,
    ):
        self.repository = repository
        self.client_repository = client_repository
        self.joiner = joiner
        self.grouping_engine = grouping_engine

    async def create_project(self, request: ProjectRequest) -> Project:
        """
        Create a new project for an existing client.

        Raises:
            InvalidIdentifier: If the client id is malformed
            RecordNotFound: If the client does not exist
        """
        client_id = str(parse_object_id(request.client))
        if not await self.client_repository.exists(client_id):
            raise RecordNotFound("Client", client_id)

        now = utc_now()
        project = Project(
            id=str(ObjectId()),
            name=request.name,
            color=request.color,
            estimate=request.estimate,
            status=request.status,
            client=client_id,
            created_at=now,
            updated_at=now,
        )
        await self.repository.add(project)
        return project

    async def get_project(self, project_id: str) -> Project:
        """Get a project by ID."""
        project = await self.repository.get_by_id(project_id)
        if not project:
            raise RecordNotFound("Project", project_id)
        return project

    async def list_projects(self) -> list[Project]:
        return await self.repository.get_all()

    async def list_project_ids(self) -> list[str]:
        return await self.repository.list_ids()

    async def delete_project(self, project_id: str) -> None:
        if not await self.repository.delete_by_id(project_id):
            raise RecordNotFound("Project", project_id)

    async def delete_all_projects(self) -> int:
        return await self.repository.delete_all()

    async def group_projects_by_client(self) -> list[ClientProjectGroup]:
        """
        Projects grouped by the name of their client.

        Raises:
            StoreQueryFailed: If the join cannot be executed or fails midway
        """
        async with aclosing(self.joiner.stream(projects_with_client())) as documents:
            return await self.grouping_engine.group_projects_by_client(documents)
