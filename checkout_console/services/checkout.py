"""
Checkout Controller

Page-level composition of the checkout step: cart, draft order sync,
client selection, shipping location, notes and discount code.
"""

import logging
from typing import Any, Optional

from ..core.config import Settings
from ..core.errors import CheckoutError, DraftOrderError, FinalizeError
from ..core.navigation import Navigator
from ..core.storage import KeyValueStore
from ..models.cart import CartItem
from ..models.client import Client
from ..models.order import DraftOrder, Totals
from .api_client import ApiClient
from .cart import CartSnapshot
from .client_selector import ClientSelector
from .discounts import Discount, DiscountValidator
from .locations import LocationSelection
from .order_sync import OrderSyncEngine
from .totals import compute_totals

logger = logging.getLogger(__name__)


class CheckoutController:
    """
    Checkout page state for one activation.

    Cart edits and notes go through the debounced amend path; client,
    location and discount choices are direct actions and are sent at once.
    """

    def __init__(
        self,
        api: ApiClient,
        store: KeyValueStore,
        navigator: Navigator,
        user_id: Optional[int] = None,
        cart_key: str = "cart",
        debounce_delay: float = 0.5,
        hydration_grace: float = 1.0,
        payment_path: str = "/payment",
    ):
        self.api = api
        self.navigator = navigator
        self.payment_path = payment_path

        self.sync = OrderSyncEngine(api, debounce_delay=debounce_delay, hydration_grace=hydration_grace)
        self.cart = CartSnapshot(store, key=cart_key, on_change=self._on_cart_change)
        self.clients = ClientSelector(api, user_id=user_id, on_select=self._on_client_selected)
        self.discounts = DiscountValidator(api)
        self.location = LocationSelection()

        self.discount: Optional[Discount] = None
        self.notes = ""
        self.totals = Totals()
        self.error: Optional[str] = None

    @classmethod
    def from_settings(
        cls,
        api: ApiClient,
        store: KeyValueStore,
        navigator: Navigator,
        settings: Settings,
    ) -> "CheckoutController":
        return cls(
            api,
            store,
            navigator,
            user_id=settings.user_id,
            cart_key=settings.cart_key,
            debounce_delay=settings.debounce_delay,
            hydration_grace=settings.hydration_grace,
            payment_path=settings.payment_path,
        )

    @property
    def order_id(self) -> Optional[int]:
        return self.sync.order_id

    @property
    def order_number(self) -> Optional[str]:
        return self.sync.order_number

    @property
    def discount_rate(self) -> float:
        return self.discount.rate if self.discount else 0.0

    @property
    def selected_client(self) -> Optional[Client]:
        return self.clients.selected

    # ==================== Activation ====================

    async def activate(self, order_id: Optional[int] = None) -> Optional[DraftOrder]:
        """
        Enter the checkout view.

        With an order id (e.g. back from payment) that order is loaded;
        a different id than the current draft supersedes it. Without one,
        a draft is created from the stored cart. Safe to call repeatedly.
        """
        if order_id is not None and self.sync.order_id not in (None, order_id):
            self.sync.discard()
            self._reset_form()

        if not self.clients.clients:
            await self.clients.load()

        try:
            if order_id is not None:
                draft = await self.sync.load_draft(order_id)
                if draft is not None:
                    self._hydrate(draft)
            else:
                if self.sync.order_id is None:
                    self.cart.load()
                    self.totals = compute_totals(self.cart.items, self.discount_rate)
                if self.cart.is_empty:
                    return None
                await self.sync.create_draft(self.cart.items)
        except DraftOrderError as e:
            self.error = str(e)
            raise

        self.error = None
        return self.sync.draft if self.sync.order_id is not None else None

    def _hydrate(self, draft: DraftOrder) -> None:
        self.cart.replace(draft.items)
        self.location = LocationSelection.from_address(draft.shipping_address)
        self.notes = draft.notes
        self.clients.selected_id = draft.client_id
        if draft.discount_code:
            self.discount = Discount(code=draft.discount_code, rate=draft.discount_rate or 0.0)
        self.totals = compute_totals(self.cart.items, self.discount_rate)

    def _reset_form(self) -> None:
        self.location = LocationSelection()
        self.notes = ""
        self.discount = None
        self.clients.selected_id = None
        self.totals = Totals()

    # ==================== Cart ====================

    def _on_cart_change(self, items: list[CartItem]) -> None:
        self.totals = compute_totals(items, self.discount_rate)
        self.sync.schedule_amend({
            **self.totals.to_payload(),
            "cartItems": [item.to_payload() for item in items],
        })

    def increment(self, product_id: int) -> None:
        self.cart.increment(product_id)

    def decrement(self, product_id: int) -> None:
        self.cart.decrement(product_id)

    def set_quantity(self, product_id: int, quantity: int) -> None:
        self.cart.set_quantity(product_id, quantity)

    # ==================== Client ====================

    async def _on_client_selected(self, client_id: int) -> None:
        await self.sync.amend_now({"client_id": client_id})

    async def select_client(self, client_id: int) -> Client:
        return await self.clients.select(client_id)

    async def create_client(self, name: str, phone: str, email: Optional[str] = None,
                            location: Optional[str] = None) -> Client:
        return await self.clients.create_and_select(name, phone, email=email, location=location)

    def search_clients(self, query: str) -> list[Client]:
        return self.clients.search(query)

    # ==================== Location ====================

    async def select_country(self, country: Optional[str]) -> str:
        address = self.location.select_country(country)
        await self.sync.amend_now({"shipping_address": address})
        return address

    async def select_region(self, region: Optional[str]) -> str:
        address = self.location.select_region(region)
        await self.sync.amend_now({"shipping_address": address})
        return address

    # ==================== Notes & discount ====================

    def set_notes(self, notes: str) -> None:
        self.notes = notes
        self.sync.schedule_amend({"notes": notes})

    async def apply_discount(self, code: str) -> Discount:
        """Validate a code and apply its rate; DiscountError leaves totals as they were"""
        discount = await self.discounts.validate(code)
        self.discount = discount
        self.totals = compute_totals(self.cart.items, self.discount_rate)
        logger.info(f"Applied discount {discount.code} ({discount.rate:.0%})")
        await self.sync.amend_now({
            **self.totals.to_payload(),
            "discount_code": discount.code,
            "discount_rate": discount.rate,
        })
        return discount

    async def remove_discount(self) -> None:
        self.discount = None
        self.totals = compute_totals(self.cart.items)
        await self.sync.amend_now({
            **self.totals.to_payload(),
            "discount_code": None,
            "discount_rate": None,
        })

    # ==================== Payment ====================

    def order_fields(self) -> dict[str, Any]:
        """Every mirrored field, as sent when finalizing"""
        return {
            "client_id": self.clients.selected_id,
            "shipping_address": self.location.shipping_address,
            "notes": self.notes,
            "discount_code": self.discount.code if self.discount else None,
            "discount_rate": self.discount.rate if self.discount else None,
            **self.totals.to_payload(),
            "cartItems": [item.to_payload() for item in self.cart.items],
        }

    async def proceed_to_payment(self) -> int:
        """Finalize the draft and move to the payment step"""
        if self.clients.selected_id is None:
            raise CheckoutError("Please select or create a client")
        if self.cart.is_empty:
            raise CheckoutError("Your cart is empty")
        if self.sync.order_id is None:
            raise CheckoutError("Order has not been created yet")

        try:
            await self.sync.finalize(self.order_fields())
        except FinalizeError as e:
            self.error = str(e)
            raise

        order_id = self.sync.order_id
        self.navigator.navigate(
            self.payment_path,
            {"order_id": order_id, "total": self.totals.total},
        )
        return order_id

    def close(self) -> None:
        """Cancel timers when the checkout view goes away"""
        self.sync.close()
