from bson import ObjectId

from src.app.core.domain.models import Client, ClientRequest
from src.app.infrastructure.client_repository import ClientRepository
from src.shared.exceptions import RecordNotFound
from src.shared.timestamps import utc_now


class ClientService:
    """Service for handling Client business logic."""

    def __init__(self, repository: ClientRepository):
        self.repository = repository

    async def create_client(self, request: ClientRequest) -> Client:
        """Create a new client."""
        now = utc_now()
        client = Client(
            id=str(ObjectId()),
            name=request.name,
            created_at=now,
            updated_at=now,
        )
        await self.repository.add(client)
        return client

    async def get_client(self, client_id: str) -> Client:
        """Get a client by ID."""
        client = await self.repository.get_by_id(client_id)
        if not client:
            raise RecordNotFound("Client", client_id)
        return client

    async def list_clients(self) -> list[Client]:
        return await self.repository.get_all()

    async def list_client_ids(self) -> list[str]:
        return await self.repository.list_ids()

    async def delete_client(self, client_id: str) -> None:
        """
        Delete a client by ID.

        Projects that still reference the client are left in place; they show
        up under the unresolved group of the projects-by-client view.
        """
        if not await self.repository.delete_by_id(client_id):
            raise RecordNotFound("Client", client_id)

    async def delete_all_clients(self) -> int:
        return await self.repository.delete_all()
