"""
Checkout Console

Wires settings, the API client, the cart store and navigation into the
checkout and payment controllers for one running console.
"""

import logging
from typing import Any, Optional

import httpx

from .core.config import Settings, get_settings
from .core.storage import JsonFileStore, KeyValueStore
from .services.api_client import ApiClient
from .services.checkout import CheckoutController
from .services.payment_session import PaymentSessionController

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class ViewHistory:
    """Navigator that keeps the visited views in memory"""

    def __init__(self, start: str = "/checkout"):
        self.entries: list[tuple[str, Optional[dict[str, Any]]]] = [(start, None)]

    @property
    def current(self) -> str:
        return self.entries[-1][0]

    @property
    def state(self) -> Optional[dict[str, Any]]:
        return self.entries[-1][1]

    def navigate(self, path: str, state: Optional[dict[str, Any]] = None) -> None:
        logger.info(f"Navigating to {path}")
        self.entries.append((path, state))


class Console:
    """
    One running console.

    Controllers are built per view activation; the API client and cart
    store are shared between them.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[KeyValueStore] = None,
        navigator: Optional[ViewHistory] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        configure_logging(self.settings)

        self.api = ApiClient(
            self.settings.api_base_url,
            timeout=self.settings.api_timeout,
            transport=transport,
        )
        self.store = store or JsonFileStore(self.settings.cart_storage_path)
        self.navigator = navigator or ViewHistory(self.settings.checkout_path)

    def checkout(self) -> CheckoutController:
        return CheckoutController.from_settings(self.api, self.store, self.navigator, self.settings)

    def payment(self) -> PaymentSessionController:
        return PaymentSessionController.from_settings(self.api, self.store, self.navigator, self.settings)

    async def close(self) -> None:
        await self.api.close()
