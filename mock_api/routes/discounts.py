"""Discount code validation route for the mock data API"""

from typing import Optional

from fastapi import APIRouter, HTTPException

from ..database.discounts import discount_db
from ..models.discount import DiscountSummary, DiscountValidationResponse

router = APIRouter(prefix="/discount-codes", tags=["Discounts"])


@router.get("", response_model=DiscountValidationResponse)
async def validate_discount_code(action: Optional[str] = None, code: Optional[str] = None):
    """Validate a discount code (?action=validate&code=...)"""
    if action != "validate" or not code:
        raise HTTPException(status_code=400, detail="Use ?action=validate&code=CODE")

    discount, error = discount_db.validate(code)
    if discount is None:
        raise HTTPException(status_code=400, detail=error)

    return DiscountValidationResponse(
        valid=True,
        discount=DiscountSummary(
            code=discount.code,
            discount_rate=discount.discount_rate,
            description=discount.description,
        ),
    )
