from collections.abc import Mapping
from typing import Any

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.document_reader import DocumentReader
from src.shared.database.identifiers import parse_object_id
from src.app.core.domain.models import EntityKind, Task


class TaskMapper(BaseEntityMapper[Task]):
    """Mapper for converting between Task domain model and stored task documents."""

    @staticmethod
    def to_document(model_instance: Task) -> dict[str, Any]:
        """Convert a Task (domain model) to a task document."""
        return {
            "_id": parse_object_id(model_instance.id),
            "name": model_instance.name,
            "initial_time": model_instance.initial_time,
            "end_time": model_instance.end_time,
            "project": parse_object_id(model_instance.project) if model_instance.project else None,
            "created_at": model_instance.created_at,
            "updated_at": model_instance.updated_at,
        }

    @staticmethod
    def to_model(document: Mapping[str, Any]) -> Task:
        """Convert a task document to Task (domain model)."""
        reader = DocumentReader(document, EntityKind.TASK)
        return Task(
            id=reader.identifier("_id"),
            name=reader.string("name"),
            initial_time=reader.timestamp("initial_time"),
            end_time=reader.timestamp("end_time"),
            project=reader.optional_identifier("project"),
            created_at=reader.timestamp("created_at"),
            updated_at=reader.timestamp("updated_at"),
        )
