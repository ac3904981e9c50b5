import json

import pytest

from checkout_console.core.storage import MemoryStore
from checkout_console.services.cart import CartSnapshot

from .fakes import FailingStore, make_item, make_product


@pytest.fixture
def changes():
    return []


@pytest.fixture
def cart(store, changes):
    cart = CartSnapshot(store, key="cart", on_change=changes.append)
    cart.replace([make_item(1, 100000, 2), make_item(2, 50000, 1)])
    return cart


def stored_quantities(store):
    return {item["product"]["id"]: item["quantity"] for item in json.loads(store.get("cart"))}


class TestCartMutations:
    def test_increment_persists_and_notifies(self, cart, store, changes):
        cart.increment(1)

        assert stored_quantities(store) == {1: 3, 2: 1}
        assert len(changes) == 1
        assert changes[0][0].quantity == 3

    def test_decrement_floor_is_noop(self, cart, store, changes):
        cart.decrement(2)

        assert stored_quantities(store) == {1: 2, 2: 1}
        assert changes == []

    def test_decrement_above_one(self, cart, store, changes):
        cart.decrement(1)

        assert stored_quantities(store)[1] == 1
        assert len(changes) == 1

    def test_set_quantity_replaces_existing_line(self, cart, store):
        cart.set_quantity(2, 7)

        assert stored_quantities(store) == {1: 2, 2: 7}

    def test_set_quantity_ignores_unknown_product(self, cart, changes):
        cart.set_quantity(99, 3)

        assert changes == []
        assert [i.product.id for i in cart.items] == [1, 2]

    def test_set_quantity_rejects_zero(self, cart):
        with pytest.raises(ValueError):
            cart.set_quantity(1, 0)

    def test_add_merges_existing_line(self, cart):
        cart.add(make_product(1, 100000), 2)
        cart.add(make_product(3, 10000))

        assert [(i.product.id, i.quantity) for i in cart.items] == [(1, 4), (2, 1), (3, 1)]

    def test_remove_line(self, cart, store):
        cart.remove(1)

        assert stored_quantities(store) == {2: 1}

    def test_listener_sees_state_before_persist(self, store):
        seen = []

        def listener(items):
            seen.append(store.get("cart"))

        cart = CartSnapshot(store, on_change=listener)
        cart.add(make_product(1, 10))

        assert seen == [None]
        assert store.get("cart") is not None


class TestCartPersistence:
    def test_load_restores_saved_cart(self, cart, store):
        restored = CartSnapshot(store)

        items = restored.load()

        assert [(i.product.id, i.quantity) for i in items] == [(1, 2), (2, 1)]
        assert restored.item_count == 3

    def test_load_ignores_corrupt_entry(self):
        store = MemoryStore()
        store.set("cart", "{not json")

        cart = CartSnapshot(store)

        assert cart.load() == []
        assert cart.is_empty

    def test_write_failures_are_swallowed(self, changes):
        cart = CartSnapshot(FailingStore(), on_change=changes.append)

        cart.add(make_product(1, 10))
        cart.increment(1)

        assert cart.items[0].quantity == 2
        assert len(changes) == 2

    def test_clear_removes_entry(self, cart, store):
        cart.clear()

        assert cart.is_empty
        assert store.get("cart") is None
