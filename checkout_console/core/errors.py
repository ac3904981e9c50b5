"""Exceptions raised by the checkout console controllers"""

from typing import Optional


class CheckoutConsoleError(Exception):
    """Base exception for checkout console errors"""
    pass


class ApiError(CheckoutConsoleError):
    """HTTP or network failure talking to the remote data API"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DraftOrderError(CheckoutConsoleError):
    """Draft order could not be created or loaded"""
    pass


class FinalizeError(CheckoutConsoleError):
    """Order fields could not be locked in before payment"""
    pass


class PaymentSessionError(CheckoutConsoleError):
    """Payment session could not be created"""
    pass


class ClientError(CheckoutConsoleError):
    """Client selection or creation failed"""
    pass


class DiscountError(CheckoutConsoleError):
    """Discount code was rejected or could not be validated"""
    pass


class CheckoutError(CheckoutConsoleError):
    """Checkout cannot proceed to payment"""
    pass


class StorageError(CheckoutConsoleError):
    """Client-local store read or write failed"""
    pass
