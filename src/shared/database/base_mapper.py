import abc
from collections.abc import Mapping
from typing import Any, Generic, TypeVar


TModel = TypeVar("TModel")


class BaseDocumentMapper(abc.ABC, Generic[TModel]):
    """Decodes raw store documents into a typed model."""

    @staticmethod
    @abc.abstractmethod
    def to_model(document: Mapping[str, Any]) -> TModel:
        pass


class BaseEntityMapper(BaseDocumentMapper[TModel]):
    """Mapper for persisted entities, which can also be encoded back into documents."""

    @staticmethod
    @abc.abstractmethod
    def to_document(model_instance: TModel) -> dict[str, Any]:
        pass
