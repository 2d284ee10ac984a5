from collections.abc import Mapping
from typing import Any

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.document_reader import DocumentReader
from src.shared.database.identifiers import parse_object_id
from src.app.core.domain.models import EntityKind, Project


class ProjectMapper(BaseEntityMapper[Project]):
    """Mapper for converting between Project domain model and stored project documents."""

    @staticmethod
    def to_document(model_instance: Project) -> dict[str, Any]:
        """Convert a Project (domain model) to a project document."""
        return {
            "_id": parse_object_id(model_instance.id),
            "name": model_instance.name,
            "color": model_instance.color,
            "estimate": model_instance.estimate,
            "status": model_instance.status,
            "client": parse_object_id(model_instance.client),
            "created_at": model_instance.created_at,
            "updated_at": model_instance.updated_at,
        }

    @staticmethod
    def to_model(document: Mapping[str, Any]) -> Project:
        """Convert a project document to Project (domain model)."""
        reader = DocumentReader(document, EntityKind.PROJECT)
        return Project(
            id=reader.identifier("_id"),
            name=reader.string("name"),
            color=reader.string("color"),
            estimate=reader.string("estimate"),
            status=reader.string("status"),
            client=reader.identifier("client"),
            created_at=reader.timestamp("created_at"),
            updated_at=reader.timestamp("updated_at"),
        )
