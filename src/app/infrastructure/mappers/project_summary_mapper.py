from collections.abc import Mapping
from typing import Any

from src.shared.database.base_mapper import BaseDocumentMapper
from src.shared.database.document_reader import DocumentReader
from src.app.core.domain.models import EntityKind, ProjectSummary


class ProjectSummaryMapper(BaseDocumentMapper[ProjectSummary]):
    """Decodes a flattened project document produced by the project join."""

    @staticmethod
    def to_model(document: Mapping[str, Any]) -> ProjectSummary:
        reader = DocumentReader(document, EntityKind.PROJECT_SUMMARY)
        return ProjectSummary(
            id=reader.identifier("_id"),
            name=reader.string("name"),
            color=reader.string("color"),
            estimate=reader.string("estimate"),
            status=reader.string("status"),
            client_name=reader.optional_string("client_name"),
            updated_at=reader.timestamp("updated_at"),
        )
