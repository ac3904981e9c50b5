# Checkout Console Services

from .api_client import ApiClient
from .cart import CartSnapshot
from .checkout import CheckoutController
from .client_selector import ClientSelector
from .discounts import Discount, DiscountValidator
from .locations import COUNTRIES, REGIONS_BY_COUNTRY, LocationSelection
from .order_sync import OrderSyncEngine
from .payment_session import PaymentSessionController, map_payment_status
from .qr import build_qr_payload
from .totals import compute_totals

__all__ = [
    "ApiClient",
    "CartSnapshot",
    "CheckoutController",
    "ClientSelector",
    "Discount",
    "DiscountValidator",
    "COUNTRIES",
    "REGIONS_BY_COUNTRY",
    "LocationSelection",
    "OrderSyncEngine",
    "PaymentSessionController",
    "map_payment_status",
    "build_qr_payload",
    "compute_totals",
]
