# Checkout Console Models

from .cart import ProductImage, ProductRef, CartItem
from .order import OrderPhase, Totals, DraftOrder
from .client import Client
from .payment import PaymentStatus, BankAccount, PaymentSession

__all__ = [
    "ProductImage",
    "ProductRef",
    "CartItem",
    "OrderPhase",
    "Totals",
    "DraftOrder",
    "Client",
    "PaymentStatus",
    "BankAccount",
    "PaymentSession",
]
