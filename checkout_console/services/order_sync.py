"""
Order Sync Engine

Owns the single draft order of a checkout activation: creates it once,
then pushes field edits to the remote order with a trailing-edge debounce.
"""

import asyncio
import logging
from typing import Any, Optional

from ..core.errors import ApiError, DraftOrderError, FinalizeError
from ..models.cart import CartItem
from ..models.order import DraftOrder, OrderPhase
from .api_client import ApiClient
from .totals import compute_totals

logger = logging.getLogger(__name__)


class OrderSyncEngine:
    """
    Draft order lifecycle: no_order -> creating -> active -> finalized.

    Creation (or loading) is admitted once per activation by a one-shot
    gate, reset only when the network call fails or the draft is discarded.
    Amendments are coalesced: each schedule_amend() call restarts a single
    timer, and when it fires the merged pending fields go out in one PUT.
    """

    def __init__(
        self,
        api: ApiClient,
        debounce_delay: float = 0.5,
        hydration_grace: float = 1.0,
    ):
        self.api = api
        self.debounce_delay = debounce_delay
        self.hydration_grace = hydration_grace

        self.phase = OrderPhase.NO_ORDER
        self.draft = DraftOrder()
        self.error: Optional[str] = None

        self._creation_initiated = False
        self._initial_load = False
        self._generation = 0
        self._hydration_handle: Optional[asyncio.TimerHandle] = None
        self._debounce_handle: Optional[asyncio.TimerHandle] = None
        self._pending_fields: dict[str, Any] = {}
        self._inflight: set[asyncio.Task] = set()

    @property
    def order_id(self) -> Optional[int]:
        return self.draft.order_id

    @property
    def order_number(self) -> Optional[str]:
        return self.draft.order_number

    @property
    def is_hydrating(self) -> bool:
        return self._initial_load

    @property
    def has_pending_amend(self) -> bool:
        return self._debounce_handle is not None

    # ==================== Creation ====================

    async def create_draft(self, items: list[CartItem]) -> Optional[DraftOrder]:
        """
        Create the draft order for this activation.

        Returns None without touching the network when creation was already
        admitted; raises DraftOrderError when the POST fails.
        """
        if self._creation_initiated or self.order_id is not None:
            logger.debug("Draft order creation already initiated, skipping")
            return None
        if not items:
            raise DraftOrderError("Cannot create an order from an empty cart")

        self._creation_initiated = True
        self._initial_load = True
        self.phase = OrderPhase.CREATING
        generation = self._generation

        totals = compute_totals(items)
        body = {
            "cartItems": [item.to_payload() for item in items],
            **totals.to_payload(),
        }

        try:
            data = await self.api.create_order(body)
        except ApiError as e:
            self._fail_creation(generation)
            self.error = f"Failed to create order: {e.message}"
            logger.error(self.error)
            raise DraftOrderError(self.error) from e

        if generation != self._generation:
            logger.info(f"Draft order {data.get('id')} created after discard, ignoring")
            return None

        self.draft = DraftOrder(
            order_id=data["id"],
            order_number=data.get("order_number"),
            client_id=data.get("client_id"),
            items=[item.model_copy(deep=True) for item in items],
        )
        self.draft.apply(totals.to_payload())
        self.phase = OrderPhase.ACTIVE
        self.error = None
        logger.info(f"Draft order {self.order_id} ({self.order_number}) created")

        self._start_hydration_grace()
        return self.draft

    async def load_draft(self, order_id: int) -> Optional[DraftOrder]:
        """Adopt an existing order instead of creating one"""
        if self._creation_initiated or self.order_id is not None:
            if self.order_id == order_id:
                return self.draft
            logger.debug(f"Draft order already initiated, not loading {order_id}")
            return None

        self._creation_initiated = True
        self._initial_load = True
        self.phase = OrderPhase.CREATING
        generation = self._generation

        try:
            data = await self.api.get_order(order_id)
        except ApiError as e:
            self._fail_creation(generation)
            self.error = f"Failed to load order {order_id}: {e.message}"
            logger.error(self.error)
            raise DraftOrderError(self.error) from e

        if generation != self._generation:
            return None

        self.draft = DraftOrder.from_remote(data)
        self.phase = OrderPhase.ACTIVE
        self.error = None
        logger.info(f"Loaded draft order {self.order_id} ({self.order_number})")

        self._start_hydration_grace()
        return self.draft

    def _fail_creation(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._creation_initiated = False
        self._initial_load = False
        self.phase = OrderPhase.NO_ORDER

    def _start_hydration_grace(self) -> None:
        if self.hydration_grace <= 0:
            self._initial_load = False
            return
        loop = asyncio.get_running_loop()
        self._hydration_handle = loop.call_later(self.hydration_grace, self._end_initial_load)

    def _end_initial_load(self) -> None:
        self._hydration_handle = None
        self._initial_load = False

    # ==================== Amendments ====================

    def schedule_amend(self, fields: dict[str, Any]) -> None:
        """
        Queue fields for the next debounced PUT.

        The local mirror is updated right away. Nothing is sent while there
        is no order or while the initial hydration window is open.
        """
        self.draft.apply(fields)

        if self.order_id is None:
            return
        if self._initial_load:
            logger.debug(f"Amend suppressed during initial load: {sorted(fields)}")
            return

        self._pending_fields.update(fields)
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()

        loop = asyncio.get_running_loop()
        self._debounce_handle = loop.call_later(self.debounce_delay, self._flush_pending)

    def _flush_pending(self) -> None:
        self._debounce_handle = None
        fields, self._pending_fields = self._pending_fields, {}
        if not fields or self.order_id is None:
            return

        task = asyncio.ensure_future(self._send_amend(self.order_id, fields))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _send_amend(self, order_id: int, fields: dict[str, Any]) -> bool:
        try:
            await self.api.update_order(order_id, fields)
        except ApiError as e:
            logger.warning(f"Background update of order {order_id} failed: {e.message}")
            return False

        logger.debug(f"Order {order_id} updated: {sorted(fields)}")
        return True

    async def amend_now(self, fields: dict[str, Any]) -> bool:
        """Send fields immediately for direct user actions, best-effort"""
        self.draft.apply(fields)
        if self.order_id is None:
            return False
        return await self._send_amend(self.order_id, fields)

    async def finalize(self, fields: dict[str, Any]) -> DraftOrder:
        """Lock fields in before payment; raises FinalizeError on failure"""
        if self.order_id is None:
            raise FinalizeError("No draft order to finalize")

        self._cancel_debounce()
        payload = {**self._pending_fields, **fields}
        self._pending_fields = {}
        self.draft.apply(payload)

        try:
            await self.api.update_order(self.order_id, payload)
        except ApiError as e:
            self.error = f"Failed to save order {self.order_id}: {e.message}"
            logger.error(self.error)
            raise FinalizeError(self.error) from e

        self.phase = OrderPhase.FINALIZED
        self.error = None
        logger.info(f"Order {self.order_id} finalized for payment")
        return self.draft

    async def wait_idle(self) -> None:
        """Wait for amend requests already on the wire"""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    # ==================== Teardown ====================

    def _cancel_debounce(self) -> None:
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
            self._debounce_handle = None

    def discard(self) -> None:
        """Forget the current draft; the server-side order is left alone"""
        if self.order_id is not None:
            logger.info(f"Discarding draft order {self.order_id}")
        self.close()
        self._generation += 1
        self._pending_fields = {}
        self._creation_initiated = False
        self._initial_load = False
        self.phase = OrderPhase.NO_ORDER
        self.draft = DraftOrder()
        self.error = None

    def close(self) -> None:
        """Cancel timers owned by this engine"""
        self._cancel_debounce()
        if self._hydration_handle is not None:
            self._hydration_handle.cancel()
            self._hydration_handle = None
