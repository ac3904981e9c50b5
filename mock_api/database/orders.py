"""Order storage for the mock data API"""

import random
import time
from datetime import datetime
from typing import Any, Optional

from ..models.order import (
    Order,
    OrderCartItem,
    OrderCreateRequest,
    OrderItem,
    OrderStatus,
    PaymentState,
)


def generate_order_number() -> str:
    """ORD-{year}-{last 6 digits of ms timestamp}{3 random digits}"""
    timestamp = str(int(time.time() * 1000))[-6:]
    suffix = f"{random.randint(0, 999):03d}"
    return f"ORD-{datetime.utcnow().year}-{timestamp}{suffix}"


class OrderError(Exception):
    """Order operation rejected by the store"""
    pass


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[int, Order] = {}
        self._next_id = 1
        self._next_item_id = 1

    def reset(self) -> None:
        self.orders.clear()
        self._next_id = 1
        self._next_item_id = 1

    def _build_items(self, cart_items: list[OrderCartItem]) -> list[OrderItem]:
        items = []
        for cart_item in cart_items:
            items.append(OrderItem(
                id=self._next_item_id,
                product_id=cart_item.product.id,
                product_name=cart_item.product.name,
                product_sku=cart_item.product.sku,
                product_price=cart_item.product.price,
                unit_price=cart_item.product.price,
                quantity=cart_item.quantity,
                total_price=cart_item.product.price * cart_item.quantity,
            ))
            self._next_item_id += 1
        return items

    def create_order(self, request: OrderCreateRequest) -> Order:
        """Create a processing order from a cart"""
        if not request.cart_items:
            raise OrderError("Missing required fields: cartItems")

        now = datetime.utcnow()
        order = Order(
            id=self._next_id,
            order_number=generate_order_number(),
            client_id=request.client_id,
            created_by=request.created_by,
            subtotal_amount=request.subtotal_amount,
            discount_amount=request.discount_amount,
            tax_amount=request.tax_amount,
            total_amount=request.total_amount,
            notes=request.notes,
            shipping_address=request.shipping_address,
            discount_code=request.discount_code,
            discount_rate=request.discount_rate,
            items=self._build_items(request.cart_items),
            created_at=now,
            updated_at=now,
        )
        self._next_id += 1
        self.orders[order.id] = order
        return order

    def get_order(self, order_id: int) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def update_order(
        self,
        order_id: int,
        fields: dict[str, Any],
        cart_items: Optional[list[OrderCartItem]] = None,
    ) -> Optional[Order]:
        """Apply a partial update; a non-empty cart_items replaces the lines"""
        order = self.get_order(order_id)
        if not order:
            return None

        if cart_items:
            order.items = self._build_items(cart_items)

        for name, value in fields.items():
            setattr(order, name, value)
        order.updated_at = datetime.utcnow()
        return order

    def delete_order(self, order_id: int) -> bool:
        """Delete a processing order"""
        order = self.get_order(order_id)
        if not order:
            return False
        if order.status != OrderStatus.PROCESSING:
            raise OrderError("Only processing orders can be deleted")
        del self.orders[order_id]
        return True

    def list_orders(self, created_by: Optional[int] = None, limit: int = 50) -> list[Order]:
        """List recent orders"""
        orders = [
            o for o in self.orders.values()
            if created_by is None or o.created_by == created_by
        ]
        orders.sort(key=lambda o: (o.created_at, o.id), reverse=True)
        return orders[:limit]

    # ==================== Payment ====================

    def create_payment(self, order_id: int) -> Order:
        """Attach a payment order; only once per order"""
        order = self.orders[order_id]
        if order.sepay_order_id:
            raise OrderError("Payment order already created")

        order.sepay_order_id = f"SEPAY-{order.order_number}"
        order.payment_method = "bank_transfer"
        order.updated_at = datetime.utcnow()
        return order

    def set_payment_status(self, order_id: int, status: PaymentState) -> Order:
        """Record the bank's verdict for an order"""
        order = self.orders[order_id]
        order.payment_status = status
        now = datetime.utcnow()
        if status == PaymentState.PAID:
            order.status = OrderStatus.COMPLETED
            order.payment_date = now
        order.updated_at = now
        return order

    def mark_paid(self, order_id: int) -> Order:
        """Simulate a confirmed bank transfer"""
        order = self.orders[order_id]
        if order.status == OrderStatus.COMPLETED and order.payment_status == PaymentState.PAID:
            raise OrderError("Order already completed")
        order.payment_method = "bank_transfer"
        return self.set_payment_status(order_id, PaymentState.PAID)


# Singleton instance
order_db = OrderDatabase()
