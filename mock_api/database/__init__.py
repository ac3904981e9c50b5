# Database modules

from .orders import order_db, OrderDatabase, OrderError
from .clients import client_db, ClientDatabase
from .discounts import discount_db, DiscountDatabase


def reset_all() -> None:
    """Empty every store (discount codes go back to the samples)"""
    order_db.reset()
    client_db.reset()
    discount_db.reset()


__all__ = [
    "order_db",
    "OrderDatabase",
    "OrderError",
    "client_db",
    "ClientDatabase",
    "discount_db",
    "DiscountDatabase",
    "reset_all",
]
