from collections.abc import Mapping
from typing import Any

from src.shared.database.base_mapper import BaseDocumentMapper


class DocumentDecoder:
    """Single entry point that turns a raw document into the model for a given kind."""

    def __init__(self, document_mappers: Mapping[str, BaseDocumentMapper]):
        self.document_mappers = dict(document_mappers)

    def decode(self, document: Mapping[str, Any], kind: str) -> Any:
        mapper = self.document_mappers.get(kind)
        if mapper is None:
            raise ValueError(f"No document mapper registered for kind: {kind}")
        return mapper.to_model(document)
