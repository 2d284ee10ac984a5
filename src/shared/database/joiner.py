import logging
from collections.abc import AsyncIterator
from typing import Any

from src.shared.database.database import Database, store_errors
from src.shared.database.pipeline import JoinSpec

logger = logging.getLogger(__name__)


class RelationalJoiner:
    """
    Executes a JoinSpec as one server-side aggregation pipeline.

    The whole join runs in a single round trip to the store; documents are
    streamed back as the cursor is consumed.
    """

    def __init__(self, db: Database):
        self.db = db

    async def stream(self, spec: JoinSpec) -> AsyncIterator[dict[str, Any]]:
        """
        Stream the joined documents of a spec.

        The cursor is closed when the stream is exhausted, fails, is closed
        early or the consuming task is cancelled.

        Raises:
            StoreQueryFailed: If the pipeline cannot be started or the cursor fails
        """
        operation = f"aggregate {spec.source}"
        pipeline = spec.to_pipeline()
        logger.debug("Running %d-stage pipeline on '%s'", len(pipeline), spec.source)

        with store_errors(operation):
            cursor = await self.db.collection(spec.source).aggregate(pipeline)
        try:
            with store_errors(operation):
                async for document in cursor:
                    yield document
        finally:
            await cursor.close()

    async def join(self, spec: JoinSpec) -> list[dict[str, Any]]:
        """Run a spec and collect every joined document."""
        return [document async for document in self.stream(spec)]
