from collections.abc import Mapping
from typing import Any

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.document_reader import DocumentReader
from src.shared.database.identifiers import parse_object_id
from src.app.core.domain.models import Client, EntityKind


class ClientMapper(BaseEntityMapper[Client]):
    """Mapper for converting between Client domain model and stored client documents."""

    @staticmethod
    def to_document(model_instance: Client) -> dict[str, Any]:
        """Convert a Client (domain model) to a client document."""
        return {
            "_id": parse_object_id(model_instance.id),
            "name": model_instance.name,
            "created_at": model_instance.created_at,
            "updated_at": model_instance.updated_at,
        }

    @staticmethod
    def to_model(document: Mapping[str, Any]) -> Client:
        """Convert a client document to Client (domain model)."""
        reader = DocumentReader(document, EntityKind.CLIENT)
        return Client(
            id=reader.identifier("_id"),
            name=reader.string("name"),
            created_at=reader.timestamp("created_at"),
            updated_at=reader.timestamp("updated_at"),
        )
