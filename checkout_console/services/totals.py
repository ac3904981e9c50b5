"""Order totals"""

from typing import Iterable

from ..models.cart import CartItem
from ..models.order import Totals


def compute_totals(items: Iterable[CartItem], discount_rate: float = 0.0) -> Totals:
    """
    Recompute subtotal, discount, tax and total for a cart.

    Args:
        items: Cart lines
        discount_rate: Fraction taken off the subtotal, as returned by the
            discount validator (0 when no code is applied)
    """
    subtotal = sum(item.line_total for item in items)
    discount = round(subtotal * discount_rate, 2) if discount_rate else 0.0
    tax = 0.0  # no tax service yet
    return Totals(
        subtotal=subtotal,
        discount=discount,
        tax=tax,
        total=round(subtotal - discount + tax, 2),
    )
