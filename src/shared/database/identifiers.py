"""Parsing of caller-supplied record identifiers."""
from typing import Any

from bson import ObjectId

from src.shared.exceptions import InvalidIdentifier

OBJECT_ID_HEX_LENGTH = 24


def is_object_id_hex(value: Any) -> bool:
    """Return True when value is a 24-character hex string."""
    return (
        isinstance(value, str)
        and len(value) == OBJECT_ID_HEX_LENGTH
        and ObjectId.is_valid(value)
    )


def parse_object_id(value: Any) -> ObjectId:
    """
    Convert a hex identifier into an ObjectId.

    Args:
        value: Identifier supplied by the caller

    Returns:
        The parsed ObjectId

    Raises:
        InvalidIdentifier: If value is not a 24-character hex string
    """
    if isinstance(value, ObjectId):
        return value
    if not is_object_id_hex(value):
        raise InvalidIdentifier(value)
    return ObjectId(value)
