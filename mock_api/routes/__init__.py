# API Routes

from .orders import router as orders_router
from .payments import router as payments_router
from .clients import router as clients_router
from .discounts import router as discounts_router

__all__ = ["orders_router", "payments_router", "clients_router", "discounts_router"]
