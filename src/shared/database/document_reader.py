"""Typed field extraction from raw store documents."""
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from bson import ObjectId

from src.shared.database.identifiers import is_object_id_hex
from src.shared.exceptions import DecodeFailed
from src.shared.timestamps import normalize_timestamp

_MISSING = object()


class DocumentReader:
    """
    Reads fields from a raw document with the expected semantic type.

    Every accessor raises DecodeFailed naming the field and the entity kind
    as soon as a required field is absent or has the wrong type, so a mapper
    that reads all of its fields before building the model either returns a
    complete model or nothing at all.
    """

    def __init__(self, document: Mapping[str, Any], kind: str):
        self.document = document
        self.kind = kind

    def _get(self, field: str) -> Any:
        value = self.document.get(field, _MISSING)
        if value is _MISSING or value is None:
            raise DecodeFailed(field, self.kind, "missing")
        return value

    def string(self, field: str) -> str:
        value = self._get(field)
        if not isinstance(value, str):
            raise DecodeFailed(field, self.kind, "not a string")
        return value

    def optional_string(self, field: str) -> str | None:
        """Display values resolved through a join; anything but a string reads as absent."""
        value = self.document.get(field)
        return value if isinstance(value, str) else None

    def identifier(self, field: str) -> str:
        value = self._get(field)
        return self._to_hex(field, value)

    def optional_identifier(self, field: str) -> str | None:
        value = self.document.get(field)
        if value is None:
            return None
        return self._to_hex(field, value)

    def timestamp(self, field: str) -> datetime:
        value = self._get(field)
        if not isinstance(value, datetime):
            raise DecodeFailed(field, self.kind, "not a timestamp")
        return normalize_timestamp(value)

    def _to_hex(self, field: str, value: Any) -> str:
        if isinstance(value, ObjectId):
            return str(value)
        if is_object_id_hex(value):
            return value.lower()
        raise DecodeFailed(field, self.kind, "not an object identifier")
