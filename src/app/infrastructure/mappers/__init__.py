"""Infrastructure mappers for converting between domain models and stored documents."""
from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.mappers.project_mapper import ProjectMapper
from src.app.infrastructure.mappers.task_mapper import TaskMapper
from src.app.infrastructure.mappers.task_summary_mapper import TaskSummaryMapper
from src.app.infrastructure.mappers.project_summary_mapper import ProjectSummaryMapper

__all__ = [
    "ClientMapper",
    "ProjectMapper",
    "TaskMapper",
    "TaskSummaryMapper",
    "ProjectSummaryMapper",
]
