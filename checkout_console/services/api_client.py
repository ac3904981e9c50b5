"""
Order API Client

HTTP client for the remote data API backing the checkout and payment flows.
"""

import logging
from typing import Optional, Any

import httpx

from ..core.errors import ApiError

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Client for the order, payment, client-directory and discount endpoints.

    Every HTTP or network failure is raised as ApiError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize API client.

        Args:
            base_url: Base URL of the data API
            timeout: Request timeout in seconds, None for no timeout
            transport: Optional transport (used to mount an in-process app)
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and decode the JSON response"""
        try:
            response = await self._http_client.request(
                method=method,
                url=path,
                json=body,
                params=params,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {method} {path} - {e!r}")
            raise ApiError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise ApiError(_error_message(response), status_code=response.status_code)

        if not response.content:
            return None
        return response.json()

    # ==================== Order APIs ====================

    async def create_order(self, body: dict) -> dict:
        """Create a draft order"""
        return await self._request("POST", "/orders", body=body)

    async def get_order(self, order_id: int) -> dict:
        """Get order details including line items"""
        return await self._request("GET", f"/orders/{order_id}")

    async def update_order(self, order_id: int, fields: dict) -> dict:
        """Partially update an order"""
        return await self._request("PUT", f"/orders/{order_id}", body=fields)

    async def delete_order(self, order_id: int) -> dict:
        """Delete a processing order"""
        return await self._request("DELETE", f"/orders/{order_id}")

    async def list_orders(self, created_by: Optional[int] = None) -> list[dict]:
        """List orders, optionally for one creator"""
        params = {"created_by": created_by} if created_by is not None else None
        return await self._request("GET", "/orders", params=params)

    # ==================== Payment APIs ====================

    async def create_payment(self, order_id: int) -> dict:
        """Create the payment order for a draft"""
        return await self._request("POST", f"/orders/{order_id}/create-payment")

    async def get_payment_status(self, order_id: int) -> dict:
        """Fetch the payment status of an order"""
        return await self._request("GET", f"/orders/{order_id}/payment-status")

    async def get_payment_config(self) -> dict:
        """Fetch merchant bank account configuration"""
        return await self._request("GET", "/payment-config")

    # ==================== Client APIs ====================

    async def list_clients(self, user_id: Optional[int] = None) -> list[dict]:
        """List customers visible to a user"""
        params = {"userId": user_id} if user_id is not None else None
        return await self._request("GET", "/clients", params=params)

    async def create_client(self, body: dict) -> dict:
        """Create a customer"""
        return await self._request("POST", "/clients", body=body)

    # ==================== Discount APIs ====================

    async def validate_discount_code(self, code: str) -> dict:
        """Validate a discount code"""
        return await self._request(
            "GET",
            "/discount-codes",
            params={"action": "validate", "code": code},
        )


def _error_message(response: httpx.Response) -> str:
    """Pull the server's error message out of an error response"""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    if isinstance(data, dict):
        message = data.get("detail") or data.get("error")
        if isinstance(message, str):
            return message
    return f"HTTP {response.status_code}"
