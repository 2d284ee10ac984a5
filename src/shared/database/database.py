import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import BaseModel
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from src.shared.exceptions import StoreQueryFailed

logger = logging.getLogger(__name__)


class DatabaseSettings(BaseModel):
    db_url: str
    db_name: str
    server_selection_timeout_ms: int = 5000


class Database:
    def __init__(self, db_settings: DatabaseSettings) -> None:
        self._client: AsyncMongoClient = AsyncMongoClient(
            db_settings.db_url,
            tz_aware=True,
            serverSelectionTimeoutMS=db_settings.server_selection_timeout_ms,
        )
        self._db: AsyncDatabase = self._client[db_settings.db_name]

    @property
    def name(self) -> str:
        return self._db.name

    def collection(self, name: str) -> AsyncCollection:
        return self._db[name]

    async def ping(self) -> None:
        with store_errors("ping"):
            await self._client.admin.command("ping")

    async def drop(self) -> None:
        with store_errors("drop database"):
            await self._client.drop_database(self._db.name)

    async def close(self) -> None:
        logger.info("Closing connection to database '%s'", self._db.name)
        await self._client.close()


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate driver errors raised inside the block into StoreQueryFailed."""
    try:
        yield
    except PyMongoError as e:
        logger.error("Store operation '%s' failed: %s", operation, e)
        raise StoreQueryFailed(operation, e) from e
