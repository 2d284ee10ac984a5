from src.app.core.domain.models import Client
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.app.infrastructure.collection_names import CLIENTS
from src.app.infrastructure.mappers.client_mapper import ClientMapper


class ClientRepository(BaseRepository[Client]):
    """Repository for Client operations."""

    collection_name = CLIENTS

    def __init__(self, db: Database, mapper: ClientMapper):
        super().__init__(db, mapper)

    async def get_all(self) -> list[Client]:
        """Get every client."""
        return await self.find_all()
