"""
Helpers for constructing the JSON bodies sent to the PayPal REST API.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

__all__ = [
    "AGREEMENT_DESCRIPTION",
    "AGREEMENT_NAME",
    "ORDER_DESCRIPTION",
    "build_agreement_token_request",
    "build_execute_agreement_request",
    "build_order_request",
    "build_payment_token_request",
    "format_start_date",
]

AGREEMENT_NAME = "Post Payment Profile"
AGREEMENT_DESCRIPTION = "Flexible Payment Agreement"
ORDER_DESCRIPTION = "Charge amount at delivery"

START_DATE_DELAY = timedelta(minutes=1)


def format_start_date(now: Optional[datetime] = None) -> str:
    """
    Return the agreement ``start_date``: one minute after ``now``, in UTC.
    """
    now = datetime.now(timezone.utc) if now is None else now.astimezone(timezone.utc)
    return (now + START_DATE_DELAY).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_agreement_token_request(
    return_url: str,
    cancel_url: str,
    *,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Body for ``POST /v1/billing-agreements/agreement-tokens``."""
    return {
        "name": AGREEMENT_NAME,
        "description": AGREEMENT_DESCRIPTION,
        "start_date": format_start_date(now),
        "payer": {"payment_method": "PAYPAL"},
        "plan": {
            "type": "MERCHANT_INITIATED_BILLING",
            "merchant_preferences": {
                "return_url": return_url,
                "cancel_url": cancel_url,
                "accepted_pymt_type": "ANY",
                "setup_fee": {"value": "0.00", "currency_code": "USD"},
            },
        },
    }


def build_execute_agreement_request(token: str) -> Dict[str, Any]:
    return {"token_id": token}


def build_payment_token_request(agreement_id: str) -> Dict[str, Any]:
    """
    Body for ``POST /v3/vault/payment-tokens`` turning a billing agreement
    into a payment-method token.
    """
    return {
        "payment_source": {
            "token": {"type": "BILLING_AGREEMENT", "id": agreement_id},
        },
    }


def build_order_request(
    payment_token: str,
    amount: str,
    currency: str = "USD",
) -> Dict[str, Any]:
    """
    Body for ``POST /v2/checkout/orders`` capturing ``amount`` immediately.

    ``amount`` is forwarded untouched; PayPal decides whether it is valid.
    """
    return {
        "intent": "CAPTURE",
        "purchase_units": [
            {
                "amount": {"currency_code": currency, "value": amount},
                "description": ORDER_DESCRIPTION,
            }
        ],
        "payment_source": {
            "token": {"id": payment_token, "type": "PAYMENT_METHOD_TOKEN"},
        },
    }
