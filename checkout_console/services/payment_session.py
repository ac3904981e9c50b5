"""
Payment Session Controller

Creates the payment order for a finalized draft, shows its transfer QR
code, and polls the payment-status endpoint until a terminal state.
"""

import asyncio
import logging
from typing import Any, Optional

from pydantic import ValidationError

from ..core.config import Settings
from ..core.errors import ApiError, PaymentSessionError, StorageError
from ..core.navigation import Navigator
from ..core.storage import KeyValueStore
from ..models.payment import BANK_CODES, BankAccount, PaymentSession, PaymentStatus
from .api_client import ApiClient
from .qr import build_qr_payload

logger = logging.getLogger(__name__)

_REMOTE_STATUSES = {
    "pending": PaymentStatus.PENDING,
    "paid": PaymentStatus.PAID,
    "failed": PaymentStatus.FAILED,
    "expired": PaymentStatus.EXPIRED,
}


def map_payment_status(data: Optional[dict[str, Any]]) -> PaymentStatus:
    """Map a payment-status response onto the local state machine"""
    if not data:
        return PaymentStatus.PENDING
    if str(data.get("order_status") or "").lower() == "completed":
        return PaymentStatus.PAID
    return _REMOTE_STATUSES.get(str(data.get("status") or "").lower(), PaymentStatus.PENDING)


def _bank_account_from(raw: Any) -> Optional[BankAccount]:
    if not isinstance(raw, dict):
        return None

    fields = {k: v for k, v in raw.items() if v is not None}
    if not fields.get("bank_code"):
        fields["bank_code"] = BANK_CODES.get(fields.get("bank_name", ""), "")
    try:
        account = BankAccount.model_validate(fields)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed bank account: {e}")
        return None
    return account if account.is_resolvable else None


class PaymentSessionController:
    """
    Payment step of one page activation.

    States: creating -> pending <-> checking -> paid | failed | expired.
    Session creation is admitted once per order id. Polling runs as a
    single task, so stopping it is one cancel.
    """

    def __init__(
        self,
        api: ApiClient,
        store: KeyValueStore,
        navigator: Navigator,
        cart_key: str = "cart",
        poll_interval: float = 5.0,
        redirect_delay: float = 3.0,
        orders_path: str = "/orders",
        checkout_path: str = "/checkout",
    ):
        self.api = api
        self.store = store
        self.navigator = navigator
        self.cart_key = cart_key
        self.poll_interval = poll_interval
        self.redirect_delay = redirect_delay
        self.orders_path = orders_path
        self.checkout_path = checkout_path

        self.status = PaymentStatus.CREATING
        self.session: Optional[PaymentSession] = None
        self.order_completed = False
        self.error: Optional[str] = None

        self._session_order_id: Optional[int] = None
        self._poll_task: Optional[asyncio.Task] = None
        self._redirect_handle: Optional[asyncio.TimerHandle] = None

    @classmethod
    def from_settings(
        cls,
        api: ApiClient,
        store: KeyValueStore,
        navigator: Navigator,
        settings: Settings,
    ) -> "PaymentSessionController":
        return cls(
            api,
            store,
            navigator,
            cart_key=settings.cart_key,
            poll_interval=settings.poll_interval,
            redirect_delay=settings.redirect_delay,
            orders_path=settings.orders_path,
            checkout_path=settings.checkout_path,
        )

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    async def activate(self, order_id: int, amount: Optional[float] = None) -> Optional[PaymentSession]:
        """
        Enter the payment step for an order.

        Re-entering for the same order reuses the session and only restarts
        polling; returns None while another activation is still creating it.
        """
        if self._session_order_id == order_id:
            if self.session is not None and not self.status.is_terminal:
                self._start_polling()
            return self.session

        if self._session_order_id is not None:
            self.stop_polling()
            self.session = None
            self.order_completed = False

        self._session_order_id = order_id
        self.status = PaymentStatus.CREATING

        try:
            data = await self._create_or_resume(order_id)
        except ApiError as e:
            self._session_order_id = None
            self.error = f"Failed to create payment for order {order_id}: {e.message}"
            logger.error(self.error)
            raise PaymentSessionError(self.error) from e

        payment_code = data.get("order_number") or str(order_id)
        if data.get("amount") is not None:
            amount = float(data["amount"])
        bank_account = await self._resolve_bank_account(data)

        self.session = PaymentSession(
            order_id=order_id,
            payment_code=payment_code,
            amount=amount or 0.0,
            qr_payload=build_qr_payload(payment_code, amount or 0.0, bank_account),
            bank_account=bank_account,
        )
        self.status = PaymentStatus.PENDING
        self.error = None
        logger.info(f"Payment session created for order {order_id} ({payment_code})")

        await self.check_status()
        if not self.status.is_terminal:
            self._start_polling()
        return self.session

    async def _create_or_resume(self, order_id: int) -> dict[str, Any]:
        """
        Create the payment order, or pick up the one an earlier visit created.

        A second create for the same order is rejected with 400; the code
        and amount are then read back from the order itself.
        """
        try:
            return await self.api.create_payment(order_id) or {}
        except ApiError as e:
            if e.status_code != 400 or "already created" not in (e.message or "").lower():
                raise
            logger.info(f"Payment order for {order_id} already exists, resuming")

        order = await self.api.get_order(order_id) or {}
        return {
            "order_number": order.get("order_number"),
            "amount": order.get("total_amount"),
        }

    async def _resolve_bank_account(self, data: dict[str, Any]) -> Optional[BankAccount]:
        account = _bank_account_from(data.get("bank_account"))
        if account is not None:
            return account

        try:
            config = await self.api.get_payment_config()
        except ApiError as e:
            logger.warning(f"Payment config unavailable, using generic QR: {e.message}")
            return None
        return _bank_account_from((config or {}).get("bank_account"))

    # ==================== Polling ====================

    async def check_status(self) -> PaymentStatus:
        """Run one status check; also used for manual refresh"""
        if self.session is None or self.status.is_terminal:
            return self.status

        order_id = self.session.order_id
        self.status = PaymentStatus.CHECKING

        try:
            data = await self.api.get_payment_status(order_id)
        except ApiError as e:
            logger.warning(f"Payment status check for order {order_id} failed: {e.message}")
            data = None
        except asyncio.CancelledError:
            if self.status == PaymentStatus.CHECKING:
                self.status = PaymentStatus.PENDING
            raise

        if self.session is None or self.session.order_id != order_id:
            return self.status
        self._transition(map_payment_status(data))
        return self.status

    def _transition(self, new_status: PaymentStatus) -> None:
        if self.status.is_terminal:
            return

        self.status = new_status
        if not new_status.is_terminal:
            return

        logger.info(f"Payment for order {self._session_order_id} is {new_status.value}")
        self.stop_polling()
        if new_status == PaymentStatus.PAID:
            self._complete_order()

    def _complete_order(self) -> None:
        self.order_completed = True
        try:
            self.store.clear(self.cart_key)
        except StorageError as e:
            logger.warning(f"Failed to clear stored cart: {e}")

        loop = asyncio.get_running_loop()
        self._redirect_handle = loop.call_later(self.redirect_delay, self._redirect_to_orders)

    def _redirect_to_orders(self) -> None:
        self._redirect_handle = None
        self.navigator.navigate(self.orders_path)

    def _start_polling(self) -> None:
        if self.is_polling:
            return
        self._poll_task = asyncio.ensure_future(self._poll())

    async def _poll(self) -> None:
        while not self.status.is_terminal:
            await asyncio.sleep(self.poll_interval)
            await self.check_status()

    def stop_polling(self) -> None:
        """Cancel the poll loop"""
        task, self._poll_task = self._poll_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()

    # ==================== Navigation ====================

    async def back_to_checkout(self) -> None:
        """Leave the payment step and return to the same draft"""
        await self.close()
        state = {"order_id": self._session_order_id} if self._session_order_id else None
        self.navigator.navigate(self.checkout_path, state)

    async def close(self) -> None:
        """Stop all timers owned by this controller"""
        task = self._poll_task
        self.stop_polling()
        if self._redirect_handle is not None:
            self._redirect_handle.cancel()
            self._redirect_handle = None

        if task is not None and task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                pass
