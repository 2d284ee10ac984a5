"""Dependency injection container using dependency-injector library."""
from dependency_injector import containers, providers

from src.app.config import Settings
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.decoder import DocumentDecoder
from src.shared.database.joiner import RelationalJoiner

from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.mappers.project_mapper import ProjectMapper
from src.app.infrastructure.mappers.task_mapper import TaskMapper
from src.app.infrastructure.mappers.task_summary_mapper import TaskSummaryMapper
from src.app.infrastructure.mappers.project_summary_mapper import ProjectSummaryMapper

from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.project_repository import ProjectRepository
from src.app.infrastructure.task_repository import TaskRepository

from src.app.core.services.client_service import ClientService
from src.app.core.services.project_service import ProjectService
from src.app.core.services.task_service import TaskService
from src.app.core.services.grouping import GroupingEngine

from src.app.core.domain.models import EntityKind


def create_document_decoder(
    client_mapper: ClientMapper,
    project_mapper: ProjectMapper,
    task_mapper: TaskMapper,
    task_summary_mapper: TaskSummaryMapper,
    project_summary_mapper: ProjectSummaryMapper,
) -> DocumentDecoder:
    """Factory function to create DocumentDecoder with one mapper per entity kind."""
    return DocumentDecoder(
        document_mappers={
            EntityKind.CLIENT: client_mapper,
            EntityKind.PROJECT: project_mapper,
            EntityKind.TASK: task_mapper,
            EntityKind.TASK_SUMMARY: task_summary_mapper,
            EntityKind.PROJECT_SUMMARY: project_summary_mapper,
        }
    )


class Container(containers.DeclarativeContainer):
    """Main application dependency injection container."""

    # =========================================================================
    # CONFIGURATION - Singleton (loaded once, cached)
    # =========================================================================
    config = providers.Singleton(Settings)

    # =========================================================================
    # SINGLETONS - Stateless Mappers (reusable across all requests)
    # =========================================================================
    client_mapper = providers.Singleton(ClientMapper)
    project_mapper = providers.Singleton(ProjectMapper)
    task_mapper = providers.Singleton(TaskMapper)
    task_summary_mapper = providers.Singleton(TaskSummaryMapper)
    project_summary_mapper = providers.Singleton(ProjectSummaryMapper)

    # =========================================================================
    # SINGLETONS - Composed Utilities
    # =========================================================================
    decoder = providers.Singleton(
        create_document_decoder,
        client_mapper=client_mapper,
        project_mapper=project_mapper,
        task_mapper=task_mapper,
        task_summary_mapper=task_summary_mapper,
        project_summary_mapper=project_summary_mapper,
    )

    grouping_engine = providers.Singleton(GroupingEngine, decoder=decoder)

    # =========================================================================
    # SINGLETON - Database (shared connection pool)
    # =========================================================================
    database_settings = providers.Singleton(
        DatabaseSettings,
        db_url=config.provided.database.url,
        db_name=config.provided.database.name,
        server_selection_timeout_ms=config.provided.database.server_selection_timeout_ms,
    )

    database = providers.Singleton(
        Database,
        db_settings=database_settings,
    )

    joiner = providers.Singleton(RelationalJoiner, db=database)

    # =========================================================================
    # FACTORIES - Repositories (per-request, share database singleton)
    # =========================================================================
    client_repository = providers.Factory(
        ClientRepository,
        db=database,
        mapper=client_mapper,
    )

    project_repository = providers.Factory(
        ProjectRepository,
        db=database,
        mapper=project_mapper,
    )

    task_repository = providers.Factory(
        TaskRepository,
        db=database,
        mapper=task_mapper,
    )

    # =========================================================================
    # FACTORIES - Services
    # =========================================================================
    client_service = providers.Factory(
        ClientService,
        repository=client_repository,
    )

    project_service = providers.Factory(
        ProjectService,
        repository=project_repository,
        client_repository=client_repository,
        joiner=joiner,
        grouping_engine=grouping_engine,
    )

    task_service = providers.Factory(
        TaskService,
        repository=task_repository,
        joiner=joiner,
        grouping_engine=grouping_engine,
    )
