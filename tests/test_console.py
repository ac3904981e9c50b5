import json

import httpx
import pytest

from checkout_console.console import Console, ViewHistory
from checkout_console.core.config import Settings
from checkout_console.core.storage import JsonFileStore
from mock_api.main import app

from .fakes import make_item


@pytest.fixture
def settings(tmp_path):
    return Settings(
        api_base_url="http://testserver",
        cart_storage_path=str(tmp_path / "storage.json"),
        debounce_delay=0.05,
        hydration_grace=0,
        poll_interval=0.05,
    )


@pytest.fixture
async def console(settings):
    console = Console(settings, transport=httpx.ASGITransport(app=app))
    yield console
    await console.close()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CHECKOUT_API_BASE_URL", "http://api.example")
    monkeypatch.setenv("CHECKOUT_POLL_INTERVAL", "2.5")
    monkeypatch.setenv("CHECKOUT_USER_ID", "12")

    settings = Settings()

    assert settings.api_base_url == "http://api.example"
    assert settings.poll_interval == 2.5
    assert settings.user_id == 12
    assert settings.api_timeout is None


def test_view_history():
    history = ViewHistory()

    history.navigate("/payment", {"order_id": 1})

    assert history.current == "/payment"
    assert history.state == {"order_id": 1}
    assert history.entries[0] == ("/checkout", None)


async def test_controllers_share_store_and_navigation(console, settings):
    assert isinstance(console.store, JsonFileStore)
    console.store.set("cart", json.dumps([make_item(1, 1000, 1).model_dump(mode="json")]))

    checkout = console.checkout()
    await checkout.activate()
    await checkout.create_client("An", "0901")
    await checkout.proceed_to_payment()
    checkout.close()

    assert console.navigator.current == settings.payment_path
    order_id = console.navigator.state["order_id"]

    payment = console.payment()
    session = await payment.activate(order_id)
    await payment.back_to_checkout()

    assert session.amount == 1000
    assert console.navigator.current == settings.checkout_path
    assert console.navigator.state == {"order_id": order_id}
