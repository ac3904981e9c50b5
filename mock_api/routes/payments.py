"""Payment API routes for the mock data API"""

import logging
import os

from fastapi import APIRouter, HTTPException

from ..database.orders import order_db, OrderError
from ..models.payment import (
    BankAccount,
    PaymentConfigResponse,
    CreatePaymentResponse,
    PaymentStatusResponse,
    SimulatedPaymentResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])


def merchant_bank_account() -> BankAccount:
    """Merchant account from MERCHANT_BANK_* environment variables"""
    return BankAccount(
        bank_name=os.getenv("MERCHANT_BANK_NAME", ""),
        bank_code=os.getenv("MERCHANT_BANK_CODE", ""),
        account_number=os.getenv("MERCHANT_BANK_ACCOUNT", ""),
        account_owner=os.getenv("MERCHANT_BANK_OWNER", ""),
    )


@router.get("/payment-config", response_model=PaymentConfigResponse)
async def payment_config():
    """Merchant bank account used for transfer QR codes"""
    return PaymentConfigResponse(bank_account=merchant_bank_account())


@router.post("/orders/{order_id}/create-payment", response_model=CreatePaymentResponse)
async def create_payment(order_id: int):
    """
    Create the payment order for a draft.

    The QR code itself is generated by the caller from the order number,
    which the bank transfer must carry as its note.
    """
    if not order_db.get_order(order_id):
        raise HTTPException(status_code=404, detail="Order not found")

    try:
        order = order_db.create_payment(order_id)
    except OrderError as e:
        raise HTTPException(status_code=400, detail=str(e))

    account = merchant_bank_account()
    logger.info(f"Payment order {order.sepay_order_id} created for order {order_id}")

    return CreatePaymentResponse(
        sepay_order_id=order.sepay_order_id,
        order_number=order.order_number,
        amount=order.total_amount,
        bank_account=account if account.account_number else None,
    )


@router.get("/orders/{order_id}/payment-status", response_model=PaymentStatusResponse)
async def payment_status(order_id: int):
    """Current payment status of an order"""
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    if not order.sepay_order_id:
        raise HTTPException(status_code=400, detail="Sepay payment order not created yet")

    return PaymentStatusResponse(
        order_id=order.id,
        sepay_order_id=order.sepay_order_id,
        status=order.payment_status,
        order_status=order.status,
        paid_at=order.payment_date,
    )


@router.post("/orders/{order_id}/test-payment", response_model=SimulatedPaymentResponse)
async def test_payment(order_id: int):
    """Simulate the bank confirming the transfer"""
    if not order_db.get_order(order_id):
        raise HTTPException(status_code=404, detail="Order not found")

    try:
        order = order_db.mark_paid(order_id)
    except OrderError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Test payment completed for order {order_id}")
    return SimulatedPaymentResponse(
        message="Test payment completed successfully",
        order_id=order.id,
        order_number=order.order_number,
    )
