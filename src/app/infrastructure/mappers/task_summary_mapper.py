from collections.abc import Mapping
from typing import Any

from src.shared.database.base_mapper import BaseDocumentMapper
from src.shared.database.document_reader import DocumentReader
from src.app.core.domain.models import EntityKind, TaskSummary


class TaskSummaryMapper(BaseDocumentMapper[TaskSummary]):
    """Decodes a flattened task document produced by the task join."""

    @staticmethod
    def to_model(document: Mapping[str, Any]) -> TaskSummary:
        reader = DocumentReader(document, EntityKind.TASK_SUMMARY)
        return TaskSummary(
            id=reader.identifier("_id"),
            name=reader.string("name"),
            initial_time=reader.timestamp("initial_time"),
            end_time=reader.timestamp("end_time"),
            project_name=reader.optional_string("project_name"),
            project_color=reader.optional_string("project_color"),
            client_name=reader.optional_string("client_name"),
        )
