"""Discount code validation"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.errors import ApiError, DiscountError
from .api_client import ApiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Discount:
    """Validated discount code"""
    code: str
    rate: float
    description: Optional[str] = None


class DiscountValidator:
    """Checks discount codes against the remote discount service"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def validate(self, code: str) -> Discount:
        normalized = (code or "").strip().upper()
        if not normalized:
            raise DiscountError("Please enter a discount code")

        try:
            data = await self.api.validate_discount_code(normalized)
        except ApiError as e:
            logger.info(f"Discount code {normalized} rejected: {e.message}")
            raise DiscountError(e.message or "Invalid discount code") from e

        if not data or not data.get("valid"):
            raise DiscountError((data or {}).get("error") or "Invalid discount code")

        discount = data.get("discount") or {}
        rate = float(discount.get("discount_rate") or 0)
        if rate > 1:
            rate = rate / 100  # stored as a percentage

        return Discount(
            code=discount.get("code", normalized),
            rate=rate,
            description=discount.get("description"),
        )
