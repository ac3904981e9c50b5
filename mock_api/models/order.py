"""Order models for the mock data API"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum

from .client import Client


class OrderStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentState(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    EXPIRED = "expired"


class OrderProduct(BaseModel):
    """Product snapshot sent with a cart line"""
    id: int
    name: str
    sku: Optional[str] = None
    price: float = Field(ge=0)


class OrderCartItem(BaseModel):
    """Cart line in an order request"""
    product: OrderProduct
    quantity: int = Field(gt=0)


class OrderCreateRequest(BaseModel):
    """Request to create a draft order"""
    cart_items: list[OrderCartItem] = Field(default_factory=list, alias="cartItems")
    client_id: Optional[int] = None
    created_by: Optional[int] = None
    subtotal_amount: float = 0.0
    discount_amount: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0
    notes: Optional[str] = None
    shipping_address: Optional[str] = None
    discount_code: Optional[str] = None
    discount_rate: Optional[float] = None

    class Config:
        populate_by_name = True


class OrderUpdateRequest(BaseModel):
    """Partial order update; only fields present in the body are applied"""
    cart_items: Optional[list[OrderCartItem]] = Field(default=None, alias="cartItems")
    client_id: Optional[int] = None
    status: Optional[OrderStatus] = None
    payment_method: Optional[str] = None
    payment_status: Optional[PaymentState] = None
    subtotal_amount: Optional[float] = None
    discount_amount: Optional[float] = None
    tax_amount: Optional[float] = None
    total_amount: Optional[float] = None
    notes: Optional[str] = None
    shipping_address: Optional[str] = None
    discount_code: Optional[str] = None
    discount_rate: Optional[float] = None

    class Config:
        populate_by_name = True


class OrderItem(BaseModel):
    """Stored order line"""
    id: int
    product_id: int
    product_name: str
    product_sku: Optional[str] = None
    product_price: float
    unit_price: float
    quantity: int
    total_price: float


class Order(BaseModel):
    """Stored order"""
    id: int
    order_number: str
    client_id: Optional[int] = None
    created_by: Optional[int] = None
    status: OrderStatus = OrderStatus.PROCESSING
    payment_status: PaymentState = PaymentState.PENDING
    payment_method: Optional[str] = None
    payment_date: Optional[datetime] = None
    subtotal_amount: float = 0.0
    discount_amount: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0
    notes: Optional[str] = None
    shipping_address: Optional[str] = None
    discount_code: Optional[str] = None
    discount_rate: Optional[float] = None
    sepay_order_id: Optional[str] = None
    items: list[OrderItem] = []
    created_at: datetime
    updated_at: datetime


class OrderDetail(Order):
    """Order with its client embedded"""
    client: Optional[Client] = None
