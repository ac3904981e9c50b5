"""Payment session models"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PaymentStatus(str, Enum):
    """States of the payment polling machine"""
    CREATING = "creating"
    PENDING = "pending"
    CHECKING = "checking"
    PAID = "paid"
    FAILED = "failed"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self in (PaymentStatus.PAID, PaymentStatus.FAILED, PaymentStatus.EXPIRED)


# Bank name -> BIN, for configs that carry only the bank name
BANK_CODES = {
    "Vietcombank": "970422",
    "VietinBank": "970415",
    "BIDV": "970418",
    "Agribank": "970405",
    "Techcombank": "970407",
    "ACB": "970416",
    "TPBank": "970423",
    "VPBank": "970432",
    "MBBank": "970422",
    "Sacombank": "970403",
}


class BankAccount(BaseModel):
    """Merchant bank account used for transfer QR codes"""
    bank_name: str = ""
    bank_code: str = ""
    account_number: str = ""
    account_owner: str = ""

    @property
    def is_resolvable(self) -> bool:
        return bool(self.bank_code and self.account_number)


@dataclass
class PaymentSession:
    """Payment session created for one draft order"""
    order_id: int
    payment_code: str
    amount: float
    qr_payload: str
    bank_account: Optional[BankAccount] = None
