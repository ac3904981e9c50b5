"""Checkout Console Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Remote data API
    api_base_url: str = "http://localhost:8001"
    api_timeout: Optional[float] = None  # no request timeout, failures surface on error only

    # Current shopper (session retrieval lives outside this package)
    user_id: Optional[int] = None

    # Client-local cart store
    cart_storage_path: str = ".checkout_console/storage.json"
    cart_key: str = "cart"

    # Timers (seconds)
    debounce_delay: float = 0.5
    hydration_grace: float = 1.0
    poll_interval: float = 5.0
    redirect_delay: float = 3.0

    # Navigation targets
    orders_path: str = "/orders"
    checkout_path: str = "/checkout"
    payment_path: str = "/payment"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "CHECKOUT_"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
