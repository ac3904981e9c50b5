"""
Cart Snapshot

Ordered list of cart lines persisted to a client-local store under one key.
"""

import json
import logging
from typing import Callable, Optional

from pydantic import ValidationError

from ..core.errors import StorageError
from ..core.storage import KeyValueStore
from ..models.cart import CartItem, ProductRef

logger = logging.getLogger(__name__)

CartListener = Callable[[list[CartItem]], None]


class CartSnapshot:
    """
    Shopping cart mirrored to a key-value store.

    Every mutation updates memory, notifies the change listener, then
    writes the whole cart to the store. Store failures are logged only;
    the in-memory cart stays valid.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = "cart",
        on_change: Optional[CartListener] = None,
    ):
        self.store = store
        self.key = key
        self.on_change = on_change
        self._items: list[CartItem] = []

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def load(self) -> list[CartItem]:
        """Read the persisted cart, falling back to an empty one"""
        try:
            raw = self.store.get(self.key)
        except StorageError as e:
            logger.warning(f"Failed to read cart from store: {e}")
            raw = None

        if raw:
            try:
                self._items = [CartItem.model_validate(item) for item in json.loads(raw)]
            except (ValueError, TypeError, ValidationError) as e:
                logger.error(f"Failed to parse stored cart: {e}")
                self._items = []
        return self.items

    def _find(self, product_id: int) -> Optional[CartItem]:
        return next((item for item in self._items if item.product.id == product_id), None)

    def add(self, product: ProductRef, quantity: int = 1) -> None:
        """Add a product, or increase the quantity of an existing line"""
        if quantity < 1:
            raise ValueError("quantity must be at least 1")

        existing = self._find(product.id)
        if existing:
            existing.quantity += quantity
        else:
            self._items.append(CartItem(product=product, quantity=quantity))
        self._commit()

    def set_quantity(self, product_id: int, quantity: int) -> None:
        """Replace the quantity of an existing line; unknown products are ignored"""
        if quantity < 1:
            raise ValueError("quantity must be at least 1")

        item = self._find(product_id)
        if item is None or item.quantity == quantity:
            return
        item.quantity = quantity
        self._commit()

    def increment(self, product_id: int) -> None:
        item = self._find(product_id)
        if item is None:
            return
        item.quantity += 1
        self._commit()

    def decrement(self, product_id: int) -> None:
        """Decrease by one; a line never drops below 1"""
        item = self._find(product_id)
        if item is None or item.quantity <= 1:
            return
        item.quantity -= 1
        self._commit()

    def remove(self, product_id: int) -> None:
        if self._find(product_id) is None:
            return
        self._items = [item for item in self._items if item.product.id != product_id]
        self._commit()

    def replace(self, items: list[CartItem]) -> None:
        """Swap in lines loaded from an existing order without notifying"""
        self._items = [item.model_copy(deep=True) for item in items]
        self._persist()

    def clear(self) -> None:
        """Empty the cart and delete the persisted entry"""
        self._items = []
        try:
            self.store.clear(self.key)
        except StorageError as e:
            logger.warning(f"Failed to clear stored cart: {e}")

    def _commit(self) -> None:
        if self.on_change:
            self.on_change(self.items)
        self._persist()

    def _persist(self) -> None:
        payload = json.dumps([item.model_dump(mode="json") for item in self._items])
        try:
            self.store.set(self.key, payload)
        except StorageError as e:
            logger.warning(f"Failed to persist cart: {e}")
