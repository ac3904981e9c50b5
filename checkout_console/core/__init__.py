# Core modules

from .config import Settings, get_settings
from .errors import (
    CheckoutConsoleError,
    ApiError,
    DraftOrderError,
    FinalizeError,
    PaymentSessionError,
    ClientError,
    DiscountError,
    CheckoutError,
    StorageError,
)
from .navigation import Navigator
from .storage import KeyValueStore, MemoryStore, JsonFileStore

__all__ = [
    "Settings",
    "get_settings",
    "CheckoutConsoleError",
    "ApiError",
    "DraftOrderError",
    "FinalizeError",
    "PaymentSessionError",
    "ClientError",
    "DiscountError",
    "CheckoutError",
    "StorageError",
    "Navigator",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
]
