# Mock Data API Models

from .client import Client, ClientCreateRequest
from .order import (
    Order,
    OrderDetail,
    OrderItem,
    OrderStatus,
    PaymentState,
    OrderProduct,
    OrderCartItem,
    OrderCreateRequest,
    OrderUpdateRequest,
)
from .payment import (
    BankAccount,
    PaymentConfigResponse,
    CreatePaymentResponse,
    PaymentStatusResponse,
    SimulatedPaymentResponse,
)
from .discount import DiscountCode, DiscountSummary, DiscountValidationResponse

__all__ = [
    "Client",
    "ClientCreateRequest",
    "Order",
    "OrderDetail",
    "OrderItem",
    "OrderStatus",
    "PaymentState",
    "OrderProduct",
    "OrderCartItem",
    "OrderCreateRequest",
    "OrderUpdateRequest",
    "BankAccount",
    "PaymentConfigResponse",
    "CreatePaymentResponse",
    "PaymentStatusResponse",
    "SimulatedPaymentResponse",
    "DiscountCode",
    "DiscountSummary",
    "DiscountValidationResponse",
]
