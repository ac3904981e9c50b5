"""Discount code storage for the mock data API"""

from datetime import datetime
from typing import Optional

from ..models.discount import DiscountCode


SAMPLE_CODES = [
    DiscountCode(code="WELCOME10", discount_rate=10, description="10% off the first order"),
    DiscountCode(code="VIP20", discount_rate=20, description="VIP customers"),
    DiscountCode(code="SUMMER5", discount_rate=5, description="Summer sale", status="inactive"),
    DiscountCode(code="LIMITED15", discount_rate=15, description="Limited run", max_usage=1, usage_count=1),
]


class DiscountDatabase:
    """In-memory discount codes"""

    def __init__(self):
        self.codes: dict[str, DiscountCode] = {}
        self.reset()

    def reset(self) -> None:
        self.codes = {c.code: c.model_copy() for c in SAMPLE_CODES}

    def add_code(self, discount: DiscountCode) -> None:
        self.codes[discount.code.upper()] = discount

    def validate(self, code: str) -> tuple[Optional[DiscountCode], Optional[str]]:
        """Return (discount, None) when usable, else (None, reason)"""
        discount = self.codes.get(code.strip().upper())
        if not discount:
            return None, "Discount code not found"
        if discount.status != "active":
            return None, "Discount code is inactive"
        if discount.max_usage is not None and discount.usage_count >= discount.max_usage:
            return None, "Discount code has reached its usage limit"

        now = datetime.utcnow()
        if discount.valid_from and discount.valid_from.date() > now.date():
            return None, "Discount code is not yet valid"
        if discount.valid_until and discount.valid_until < now:
            return None, "Discount code has expired"
        return discount, None


# Singleton instance
discount_db = DiscountDatabase()
