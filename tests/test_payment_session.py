import asyncio
import json

import pytest

from checkout_console.core.errors import ApiError, PaymentSessionError
from checkout_console.models.payment import PaymentStatus
from checkout_console.services.payment_session import (
    PaymentSessionController,
    map_payment_status,
)

from .fakes import POLL, REDIRECT

PENDING = {"status": "pending"}
PAID = {"status": "paid"}


@pytest.fixture
async def controller(fake_api, store, navigator):
    store.set("cart", "[]")
    controller = PaymentSessionController(
        fake_api,
        store,
        navigator,
        poll_interval=POLL,
        redirect_delay=REDIRECT,
    )
    yield controller
    await controller.close()


class TestCreation:
    async def test_fresh_session_checks_immediately(self, controller, fake_api):
        assert controller.status == PaymentStatus.CREATING

        session = await controller.activate(100, amount=250000)

        assert session.payment_code == "ORD-2026-123456789"
        assert session.amount == 250000
        assert controller.status == PaymentStatus.PENDING
        assert controller.is_polling
        assert fake_api.count("get_payment_status") == 1

    async def test_concurrent_activations_create_once(self, controller, fake_api):
        await asyncio.gather(*(controller.activate(100) for _ in range(3)))

        assert fake_api.count("create_payment") == 1

    async def test_reentry_for_same_order_reuses_session(self, controller, fake_api):
        first = await controller.activate(100)
        controller.stop_polling()

        second = await controller.activate(100)

        assert second is first
        assert controller.is_polling
        assert fake_api.count("create_payment") == 1

    async def test_creation_failure_releases_gate(self, controller, fake_api):
        fake_api.fail.add("create_payment")

        with pytest.raises(PaymentSessionError):
            await controller.activate(100)
        assert controller.error is not None
        assert not controller.is_polling

        fake_api.fail.clear()
        assert await controller.activate(100) is not None
        assert fake_api.count("create_payment") == 2

    async def test_existing_payment_order_is_resumed(self, controller, fake_api):
        fake_api.payment_error = ApiError("Payment order already created", status_code=400)
        fake_api.orders[100] = {"id": 100, "order_number": "ORD-2026-555000111", "total_amount": 180000}

        session = await controller.activate(100)

        assert session.payment_code == "ORD-2026-555000111"
        assert session.amount == 180000
        assert controller.status == PaymentStatus.PENDING
        assert controller.is_polling

    async def test_other_rejections_stay_fatal(self, controller, fake_api):
        fake_api.payment_error = ApiError("Order not found", status_code=404)

        with pytest.raises(PaymentSessionError):
            await controller.activate(100)
        assert fake_api.count("get_order") == 0


class TestQrPayload:
    async def test_config_bank_account_gives_vietqr_url(self, controller, fake_api):
        fake_api.payment_config = {
            "bank_account": {
                "bank_name": "Vietcombank",
                "bank_code": "970436",
                "account_number": "1234567890",
                "account_owner": "NOBLECO",
            }
        }

        session = await controller.activate(100)

        assert session.qr_payload.startswith("https://img.vietqr.io/image/970436-1234567890-compact2.png?")
        assert "amount=250000" in session.qr_payload
        assert "addInfo=ORD-2026-123456789" in session.qr_payload

    async def test_bank_code_derived_from_bank_name(self, controller, fake_api):
        fake_api.payment_config = {
            "bank_account": {
                "account_number": "0123456789",
                "bank_name": "Vietcombank",
                "account_owner": "NOBLECO",
            }
        }

        session = await controller.activate(100)

        assert session.bank_account.bank_code == "970422"
        assert session.qr_payload.startswith("https://img.vietqr.io/image/970422-0123456789-compact2.png?")

    async def test_unknown_bank_name_falls_back_to_generic_payload(self, controller, fake_api):
        fake_api.payment_config = {"bank_account": {"account_number": "0123456789", "bank_name": "Nowhere Bank"}}

        session = await controller.activate(100)

        assert session.bank_account is None
        assert json.loads(session.qr_payload)["payment_code"] == "ORD-2026-123456789"

    async def test_missing_account_falls_back_to_generic_payload(self, controller, fake_api):
        fake_api.fail.add("get_payment_config")

        session = await controller.activate(100)

        assert json.loads(session.qr_payload) == {"payment_code": "ORD-2026-123456789", "amount": 250000}
        assert session.bank_account is None


class TestPolling:
    async def test_paid_clears_cart_and_redirects(self, controller, fake_api, store, navigator):
        fake_api.payment_statuses = [PENDING, PAID]
        controller.redirect_delay = REDIRECT * 3

        await controller.activate(100)
        await asyncio.sleep(POLL * 3)

        assert controller.status == PaymentStatus.PAID
        assert controller.order_completed
        assert store.get("cart") is None
        assert navigator.history == []

        await asyncio.sleep(REDIRECT * 4)
        assert navigator.last == ("/orders", None)

    async def test_terminal_state_stops_ticks(self, controller, fake_api):
        fake_api.payment_statuses = [PENDING, PAID]

        await controller.activate(100)
        await asyncio.sleep(POLL * 3)
        checks = fake_api.count("get_payment_status")
        await asyncio.sleep(POLL * 4)

        assert checks == 2
        assert fake_api.count("get_payment_status") == checks
        assert not controller.is_polling
        assert await controller.check_status() == PaymentStatus.PAID
        assert fake_api.count("get_payment_status") == checks

    @pytest.mark.parametrize("remote, expected", [("failed", PaymentStatus.FAILED), ("expired", PaymentStatus.EXPIRED)])
    async def test_failed_and_expired_stop_without_redirect(
        self, controller, fake_api, store, navigator, remote, expected
    ):
        fake_api.payment_statuses = [{"status": remote}]

        await controller.activate(100)
        await asyncio.sleep(POLL * 3)

        assert controller.status == expected
        assert fake_api.count("get_payment_status") == 1
        assert store.get("cart") == "[]"
        await asyncio.sleep(REDIRECT * 2)
        assert navigator.history == []

    async def test_network_error_keeps_pending(self, controller, fake_api):
        fake_api.payment_statuses = [PENDING, ApiError("connection reset"), PENDING]

        await controller.activate(100)
        await asyncio.sleep(POLL * 1.5)

        assert controller.status in (PaymentStatus.PENDING, PaymentStatus.CHECKING)
        await asyncio.sleep(POLL * 3)
        assert controller.status in (PaymentStatus.PENDING, PaymentStatus.CHECKING)
        assert controller.is_polling
        assert fake_api.count("get_payment_status") >= 3

    async def test_manual_refresh_runs_out_of_band(self, controller, fake_api):
        await controller.activate(100)

        status = await controller.check_status()

        assert status == PaymentStatus.PENDING
        assert fake_api.count("get_payment_status") == 2
        assert controller.is_polling


class TestLeaving:
    async def test_back_to_checkout_stops_polling(self, controller, fake_api, navigator):
        await controller.activate(100)

        await controller.back_to_checkout()
        checks = fake_api.count("get_payment_status")
        await asyncio.sleep(POLL * 3)

        assert not controller.is_polling
        assert fake_api.count("get_payment_status") == checks
        assert navigator.last == ("/checkout", {"order_id": 100})

    async def test_leaving_mid_check_restores_pending(self, controller, fake_api):
        await controller.activate(100)
        fake_api.status_delay = POLL * 10
        await asyncio.sleep(POLL * 1.5)
        assert controller.status == PaymentStatus.CHECKING

        await controller.close()

        assert controller.status == PaymentStatus.PENDING
        assert not controller.is_polling

    async def test_close_cancels_pending_redirect(self, controller, fake_api, navigator):
        fake_api.payment_statuses = [PAID]

        await controller.activate(100)
        await controller.close()
        await asyncio.sleep(REDIRECT * 2)

        assert controller.status == PaymentStatus.PAID
        assert navigator.history == []


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"status": "pending"}, PaymentStatus.PENDING),
        ({"status": "PAID"}, PaymentStatus.PAID),
        ({"status": "pending", "order_status": "completed"}, PaymentStatus.PAID),
        ({"status": "not_created"}, PaymentStatus.PENDING),
        (None, PaymentStatus.PENDING),
    ],
)
def test_map_payment_status(data, expected):
    assert map_payment_status(data) == expected
