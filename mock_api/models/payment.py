"""Payment models for the mock data API"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from .order import OrderStatus, PaymentState


class BankAccount(BaseModel):
    """Merchant bank account"""
    bank_name: str = ""
    bank_code: str = ""
    account_number: str = ""
    account_owner: str = ""


class PaymentConfigResponse(BaseModel):
    success: bool = True
    bank_account: BankAccount


class CreatePaymentResponse(BaseModel):
    success: bool = True
    sepay_order_id: str
    order_number: str
    amount: float
    bank_account: Optional[BankAccount] = None


class PaymentStatusResponse(BaseModel):
    order_id: int
    sepay_order_id: str
    status: PaymentState
    order_status: OrderStatus
    paid_at: Optional[datetime] = None


class SimulatedPaymentResponse(BaseModel):
    success: bool = True
    message: str
    order_id: int
    order_number: str
