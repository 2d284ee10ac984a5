import abc
from collections.abc import Mapping
from typing import Any, Generic, Optional, TypeVar

from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.database import Database, store_errors
from src.shared.database.identifiers import parse_object_id


TModel = TypeVar("TModel")


class BaseRepository(abc.ABC, Generic[TModel]):
    """
    Single-collection data access.

    Identifiers are parsed before any store call so malformed ids fail with
    InvalidIdentifier without a round trip. Documents are decoded through the
    mapper, which raises DecodeFailed for malformed records.
    """

    collection_name: str

    def __init__(self, db: Database, mapper: BaseEntityMapper[TModel]):
        self.db = db
        self.mapper = mapper

    @property
    def collection(self) -> AsyncCollection:
        return self.db.collection(self.collection_name)

    async def find_one(self, query: Mapping[str, Any]) -> Optional[TModel]:
        with store_errors(f"find_one {self.collection_name}"):
            document = await self.collection.find_one(query)
        if document is None:
            return None
        return self.mapper.to_model(document)

    async def find_all(self, query: Optional[Mapping[str, Any]] = None) -> list[TModel]:
        with store_errors(f"find {self.collection_name}"):
            documents = await self.collection.find(query or {}).to_list()
        return [self.mapper.to_model(document) for document in documents]

    async def get_by_id(self, record_id: str) -> Optional[TModel]:
        return await self.find_one({"_id": parse_object_id(record_id)})

    async def exists(self, record_id: str) -> bool:
        oid = parse_object_id(record_id)
        with store_errors(f"count {self.collection_name}"):
            return await self.collection.count_documents({"_id": oid}, limit=1) > 0

    async def add(self, model_instance: TModel) -> None:
        document = self.mapper.to_document(model_instance)
        with store_errors(f"insert_one {self.collection_name}"):
            await self.collection.insert_one(document)

    async def replace(self, model_instance: TModel) -> Optional[TModel]:
        """Replace the stored document with the same id; returns None if it no longer exists."""
        document = self.mapper.to_document(model_instance)
        with store_errors(f"find_one_and_replace {self.collection_name}"):
            replaced = await self.collection.find_one_and_replace(
                {"_id": document["_id"]},
                document,
                return_document=ReturnDocument.AFTER,
            )
        if replaced is None:
            return None
        return self.mapper.to_model(replaced)

    async def delete_by_id(self, record_id: str) -> bool:
        oid = parse_object_id(record_id)
        with store_errors(f"delete_one {self.collection_name}"):
            result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def delete_all(self) -> int:
        with store_errors(f"delete_many {self.collection_name}"):
            result = await self.collection.delete_many({})
        return result.deleted_count

    async def list_ids(self) -> list[str]:
        with store_errors(f"distinct {self.collection_name}"):
            ids = await self.collection.distinct("_id")
        return [str(oid) for oid in ids]
