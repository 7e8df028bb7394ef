"""Tests for the PayPal request-body builders."""

from datetime import datetime, timedelta, timezone

from paypal_agreements.core.payloads import (
    build_agreement_token_request,
    build_execute_agreement_request,
    build_order_request,
    format_start_date,
)


def test_start_date_is_one_minute_ahead_in_utc():
    now = datetime(2024, 3, 1, 23, 59, 30, tzinfo=timezone.utc)

    assert format_start_date(now) == "2024-03-02T00:00:30Z"


def test_start_date_converts_offset_aware_times():
    now = datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone(timedelta(hours=2)))

    assert format_start_date(now) == "2024-03-01T08:01:00Z"


def test_agreement_token_request_matches_paypal_contract():
    now = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    body = build_agreement_token_request("https://x/ok", "https://x/cancel", now=now)

    assert body == {
        "name": "Post Payment Profile",
        "description": "Flexible Payment Agreement",
        "start_date": "2024-01-15T12:01:00Z",
        "payer": {"payment_method": "PAYPAL"},
        "plan": {
            "type": "MERCHANT_INITIATED_BILLING",
            "merchant_preferences": {
                "return_url": "https://x/ok",
                "cancel_url": "https://x/cancel",
                "accepted_pymt_type": "ANY",
                "setup_fee": {"value": "0.00", "currency_code": "USD"},
            },
        },
    }


def test_execute_request_wraps_token():
    assert build_execute_agreement_request("BA-123") == {"token_id": "BA-123"}


def test_order_request_defaults_to_usd():
    body = build_order_request("TOK1", "55.00")

    assert body["purchase_units"] == [
        {
            "amount": {"currency_code": "USD", "value": "55.00"},
            "description": "Charge amount at delivery",
        }
    ]
