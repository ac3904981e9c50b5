"""End-to-end checkout and payment against the in-process mock data API"""

import asyncio
import json

from checkout_console.models.payment import PaymentStatus
from checkout_console.services.checkout import CheckoutController
from checkout_console.services.payment_session import PaymentSessionController
from mock_api.database import order_db

from .fakes import DEBOUNCE, POLL, REDIRECT, make_item


async def test_checkout_to_paid(api, http, store, navigator):
    items = [make_item(1, 100000, 2), make_item(2, 50000, 1)]
    store.set("cart", json.dumps([item.model_dump(mode="json") for item in items]))

    checkout = CheckoutController(api, store, navigator, user_id=5, debounce_delay=DEBOUNCE, hydration_grace=0)
    await checkout.activate()
    order_id = checkout.order_id
    assert order_db.get_order(order_id).total_amount == 250000

    await checkout.create_client("Nguyen Van An", "0901234567")
    await checkout.select_country("Vietnam")
    await checkout.select_region("Hanoi")
    checkout.increment(2)
    await asyncio.sleep(DEBOUNCE * 3)
    await checkout.sync.wait_idle()

    stored = order_db.get_order(order_id)
    assert stored.shipping_address == "Hanoi, Vietnam"
    assert stored.total_amount == 300000
    assert [(i.product_id, i.quantity) for i in stored.items] == [(1, 2), (2, 2)]

    await checkout.apply_discount("WELCOME10")
    assert await checkout.proceed_to_payment() == order_id
    checkout.close()

    stored = order_db.get_order(order_id)
    assert stored.client_id is not None
    assert stored.discount_code == "WELCOME10"
    assert stored.total_amount == 270000
    assert navigator.last == ("/payment", {"order_id": order_id, "total": 270000})

    payment = PaymentSessionController(api, store, navigator, poll_interval=POLL, redirect_delay=REDIRECT)
    session = await payment.activate(order_id)
    assert session.payment_code == stored.order_number
    assert session.amount == 270000
    assert payment.status == PaymentStatus.PENDING

    await http.post(f"/orders/{order_id}/test-payment")
    await asyncio.sleep(POLL * 3)

    assert payment.status == PaymentStatus.PAID
    assert store.get("cart") is None
    await asyncio.sleep(REDIRECT * 2)
    assert navigator.last == ("/orders", None)
    await payment.close()


async def test_back_from_payment_reuses_draft(api, store, navigator):
    store.set("cart", json.dumps([make_item(1, 100000, 1).model_dump(mode="json")]))

    first = CheckoutController(api, store, navigator, debounce_delay=DEBOUNCE, hydration_grace=0)
    await first.activate()
    await first.select_country("Japan")
    first.close()

    payment = PaymentSessionController(api, store, navigator, poll_interval=POLL)
    await payment.activate(first.order_id)
    await payment.back_to_checkout()
    path, state = navigator.last
    assert path == "/checkout"

    second = CheckoutController(api, store, navigator, debounce_delay=DEBOUNCE, hydration_grace=0)
    await second.activate(order_id=state["order_id"])
    second.close()

    assert second.order_id == first.order_id
    assert second.location.country == "Japan"
    assert len(order_db.orders) == 1


async def test_proceeding_again_resumes_payment(api, http, store, navigator):
    store.set("cart", json.dumps([make_item(1, 100000, 1).model_dump(mode="json")]))

    checkout = CheckoutController(api, store, navigator, debounce_delay=DEBOUNCE, hydration_grace=0)
    await checkout.activate()
    await checkout.create_client("Nguyen Van An", "0901234567")
    order_id = await checkout.proceed_to_payment()
    checkout.close()

    first = PaymentSessionController(api, store, navigator, poll_interval=POLL, redirect_delay=REDIRECT)
    created = await first.activate(order_id)
    await first.back_to_checkout()

    checkout = CheckoutController(api, store, navigator, debounce_delay=DEBOUNCE, hydration_grace=0)
    await checkout.activate(order_id=navigator.last[1]["order_id"])
    assert await checkout.proceed_to_payment() == order_id
    checkout.close()

    second = PaymentSessionController(api, store, navigator, poll_interval=POLL, redirect_delay=REDIRECT)
    resumed = await second.activate(order_id)

    assert resumed.payment_code == created.payment_code
    assert resumed.amount == 100000
    assert second.status == PaymentStatus.PENDING

    await http.post(f"/orders/{order_id}/test-payment")
    await asyncio.sleep(POLL * 3)

    assert second.status == PaymentStatus.PAID
    await second.close()
