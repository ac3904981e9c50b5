"""
Checkout Console

Draft-order and payment-session controllers for the order console's
checkout and payment steps.
"""

from .core import Settings, get_settings, JsonFileStore, MemoryStore
from .services import (
    ApiClient,
    CheckoutController,
    PaymentSessionController,
    compute_totals,
)
from .console import Console, ViewHistory

__all__ = [
    "Console",
    "ViewHistory",
    "Settings",
    "get_settings",
    "JsonFileStore",
    "MemoryStore",
    "ApiClient",
    "CheckoutController",
    "PaymentSessionController",
    "compute_totals",
]
