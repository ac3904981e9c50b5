"""Draft order state mirrored from the remote order resource"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .cart import CartItem, ProductRef


class OrderPhase(str, Enum):
    """Lifecycle of the draft order owned by one checkout activation"""
    NO_ORDER = "no_order"
    CREATING = "creating"
    ACTIVE = "active"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class Totals:
    """Derived order amounts"""
    subtotal: float = 0.0
    discount: float = 0.0
    tax: float = 0.0
    total: float = 0.0

    def to_payload(self) -> dict[str, float]:
        return {
            "subtotal_amount": self.subtotal,
            "discount_amount": self.discount,
            "tax_amount": self.tax,
            "total_amount": self.total,
        }


# Wire field -> DraftOrder attribute
MIRRORED_FIELDS = {
    "client_id": "client_id",
    "shipping_address": "shipping_address",
    "notes": "notes",
    "discount_code": "discount_code",
    "discount_rate": "discount_rate",
    "subtotal_amount": "subtotal_amount",
    "discount_amount": "discount_amount",
    "tax_amount": "tax_amount",
    "total_amount": "total_amount",
}


@dataclass
class DraftOrder:
    """Local mirror of the server-side draft order"""
    order_id: Optional[int] = None
    order_number: Optional[str] = None
    client_id: Optional[int] = None
    shipping_address: str = ""
    notes: str = ""
    discount_code: Optional[str] = None
    discount_rate: Optional[float] = None
    subtotal_amount: float = 0.0
    discount_amount: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0
    items: list[CartItem] = field(default_factory=list)

    def apply(self, fields: dict[str, Any]) -> None:
        """Copy wire-named fields onto the mirror"""
        for wire_name, attr in MIRRORED_FIELDS.items():
            if wire_name in fields:
                value = fields[wire_name]
                if attr in ("shipping_address", "notes") and value is None:
                    value = ""
                setattr(self, attr, value)

        if "cartItems" in fields:
            self.items = [CartItem.model_validate(item) for item in fields["cartItems"]]

    @classmethod
    def from_remote(cls, data: dict[str, Any]) -> "DraftOrder":
        """Build the mirror from a GET /orders/{id} response"""
        order = cls(
            order_id=data["id"],
            order_number=data.get("order_number"),
        )
        order.apply({k: v for k, v in data.items() if k in MIRRORED_FIELDS})

        client = data.get("client")
        if order.client_id is None and client:
            order.client_id = client.get("id")

        order.items = [_item_from_remote(item) for item in data.get("items") or []]
        return order


def _item_from_remote(item: dict[str, Any]) -> CartItem:
    """Rebuild a cart line from a stored order line"""
    product = item.get("product") or {}
    return CartItem(
        product=ProductRef(
            id=item.get("product_id", product.get("id")),
            name=item.get("product_name") or product.get("name", ""),
            sku=item.get("product_sku") or product.get("sku"),
            price=item.get("unit_price", product.get("price", 0)),
            images=product.get("images") or [],
        ),
        quantity=item["quantity"],
    )
