"""
Client Selector

Search, select or create the customer the draft order is placed for.
"""

import logging
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError

from ..core.errors import ApiError, ClientError
from ..models.client import Client
from .api_client import ApiClient

logger = logging.getLogger(__name__)

SelectListener = Callable[[int], Awaitable[object]]


class ClientSelector:
    """Customer directory view used by the checkout page"""

    def __init__(
        self,
        api: ApiClient,
        user_id: Optional[int] = None,
        on_select: Optional[SelectListener] = None,
    ):
        self.api = api
        self.user_id = user_id
        self.on_select = on_select
        self.clients: list[Client] = []
        self.selected_id: Optional[int] = None

    @property
    def selected(self) -> Optional[Client]:
        return next((c for c in self.clients if c.id == self.selected_id), None)

    async def load(self) -> list[Client]:
        """Fetch the directory; failures leave the current list in place"""
        try:
            data = await self.api.list_clients(self.user_id)
        except ApiError as e:
            logger.warning(f"Failed to load clients: {e.message}")
            return self.clients

        try:
            self.clients = [Client.model_validate(c) for c in data or []]
        except ValidationError as e:
            logger.warning(f"Unexpected client list payload: {e}")
        return self.clients

    def search(self, query: str) -> list[Client]:
        """Filter loaded clients by name, phone or email"""
        if not query:
            return list(self.clients)
        return [c for c in self.clients if c.matches(query)]

    async def select(self, client_id: int) -> Client:
        """Select a loaded client and push it to the order immediately"""
        client = next((c for c in self.clients if c.id == client_id), None)
        if client is None:
            raise ClientError(f"Unknown client: {client_id}")

        self.selected_id = client.id
        if self.on_select:
            await self.on_select(client.id)
        return client

    async def create_and_select(
        self,
        name: str,
        phone: str,
        email: Optional[str] = None,
        location: Optional[str] = None,
    ) -> Client:
        """Create a customer, add it to the list, and select it"""
        name = (name or "").strip()
        phone = (phone or "").strip()
        if not name or not phone:
            raise ClientError("Please fill in name and phone number")

        body = {
            "name": name,
            "phone": phone,
            "email": email or None,
            "location": location or None,
            "created_by": self.user_id,
        }
        try:
            data = await self.api.create_client(body)
            client = Client.model_validate(data)
        except ApiError as e:
            logger.error(f"Failed to create client: {e.message}")
            raise ClientError(e.message or "Failed to create client") from e
        except ValidationError as e:
            logger.error(f"Unexpected create-client response: {e}")
            raise ClientError("Failed to create client") from e

        logger.info(f"Created client {client.id} ({client.name})")
        self.clients.append(client)
        return await self.select(client.id)
