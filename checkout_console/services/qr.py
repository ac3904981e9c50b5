"""Bank transfer QR payloads"""

import json
from typing import Optional
from urllib.parse import urlencode

from ..models.payment import BankAccount

VIETQR_IMAGE_URL = "https://img.vietqr.io/image/{bank_code}-{account_number}-{template}.png"


def build_qr_payload(
    payment_code: str,
    amount: float,
    bank_account: Optional[BankAccount] = None,
    template: str = "compact2",
) -> str:
    """
    Build the payload rendered as the payment QR code.

    With a resolvable merchant account this is a VietQR image URL carrying
    the account, the amount and the payment code as transfer note, so the
    bank webhook can match the transfer to the order. Otherwise the code
    and amount are encoded directly.
    """
    if bank_account is not None and bank_account.is_resolvable:
        params = {"amount": int(round(amount)), "addInfo": payment_code}
        if bank_account.account_owner:
            params["accountName"] = bank_account.account_owner

        url = VIETQR_IMAGE_URL.format(
            bank_code=bank_account.bank_code,
            account_number=bank_account.account_number,
            template=template,
        )
        return f"{url}?{urlencode(params)}"

    return json.dumps({"payment_code": payment_code, "amount": amount})
