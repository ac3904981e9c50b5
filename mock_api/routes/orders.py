"""Order API routes for the mock data API"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from ..database.clients import client_db
from ..database.orders import order_db, OrderError
from ..models.order import (
    Order,
    OrderDetail,
    OrderCreateRequest,
    OrderUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


def _require_order(order_id: int) -> Order:
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("", response_model=list[Order])
async def list_orders(created_by: Optional[int] = None, limit: int = 50):
    """List recent orders"""
    return order_db.list_orders(created_by=created_by, limit=limit)


@router.post("", response_model=Order, status_code=201)
async def create_order(request: OrderCreateRequest):
    """Create a draft order in processing state"""
    try:
        order = order_db.create_order(request)
    except OrderError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        f"Order {order.id} ({order.order_number}) created: "
        f"{len(order.items)} items, total {order.total_amount}"
    )
    return order


@router.get("/{order_id}", response_model=OrderDetail)
async def get_order(order_id: int):
    """Get order details with line items and client"""
    order = _require_order(order_id)
    client = client_db.get_client(order.client_id) if order.client_id else None
    return OrderDetail(**order.model_dump(), client=client)


@router.put("/{order_id}", response_model=Order)
async def update_order(order_id: int, request: OrderUpdateRequest):
    """Apply the fields present in the body"""
    _require_order(order_id)
    fields = request.model_dump(exclude_unset=True, exclude={"cart_items"})
    order = order_db.update_order(order_id, fields, cart_items=request.cart_items)

    logger.info(f"Order {order_id} updated: {sorted(fields)}{' + items' if request.cart_items else ''}")
    return order


@router.delete("/{order_id}")
async def delete_order(order_id: int):
    """Delete a processing order"""
    _require_order(order_id)
    try:
        order_db.delete_order(order_id)
    except OrderError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Order {order_id} deleted")
    return {"success": True, "order_id": order_id}
