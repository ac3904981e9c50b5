"""Client storage for the mock data API"""

from datetime import datetime
from typing import Optional

from ..models.client import Client, ClientCreateRequest


class ClientDatabase:
    """In-memory customer directory"""

    def __init__(self):
        self.clients: dict[int, Client] = {}
        self._next_id = 1

    def reset(self) -> None:
        self.clients.clear()
        self._next_id = 1

    def create_client(self, request: ClientCreateRequest) -> Client:
        client = Client(
            id=self._next_id,
            name=request.name.strip(),
            phone=request.phone.strip(),
            email=request.email or None,
            location=request.location or None,
            created_by=request.created_by,
            created_at=datetime.utcnow(),
        )
        self._next_id += 1
        self.clients[client.id] = client
        return client

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.clients.get(client_id)

    def list_clients(self, created_by: Optional[int] = None) -> list[Client]:
        """Clients created by a user, or all of them"""
        return [
            c for c in self.clients.values()
            if created_by is None or c.created_by == created_by
        ]


# Singleton instance
client_db = ClientDatabase()
