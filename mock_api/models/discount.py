"""Discount code models for the mock data API"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class DiscountCode(BaseModel):
    """Stored discount code; discount_rate is a percentage"""
    code: str
    discount_rate: float = Field(ge=0, le=100)
    description: Optional[str] = None
    status: str = "active"
    max_usage: Optional[int] = None
    usage_count: int = 0
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None


class DiscountSummary(BaseModel):
    code: str
    discount_rate: float
    description: Optional[str] = None


class DiscountValidationResponse(BaseModel):
    valid: bool
    discount: DiscountSummary
