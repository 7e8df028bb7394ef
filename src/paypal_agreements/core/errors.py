"""
Exceptions raised by the PayPal agreement client.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "AgreementIdNotFoundError",
    "ApprovalUrlNotFoundError",
    "AuthenticationFailedError",
    "NotConfiguredError",
    "OrderIdNotFoundError",
    "PayPalError",
    "PaymentTokenNotReturnedError",
    "RequestFailedError",
]


class PayPalError(Exception):
    """
    Base class for every failure surfaced by the client.

    ``operation`` names the client call that failed so that a single log line
    is enough to tell which step of the agreement flow broke.
    """

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"{operation}: {detail}")
        self.operation = operation
        self.detail = detail


class NotConfiguredError(PayPalError):
    def __init__(self, operation: str) -> None:
        super().__init__(
            operation, "PayPal client is not configured. Call configure() first."
        )


class AuthenticationFailedError(PayPalError):
    def __init__(
        self,
        detail: str,
        *,
        status_code: Optional[int] = None,
        operation: str = "authenticate",
    ) -> None:
        super().__init__(operation, detail)
        self.status_code = status_code


class RequestFailedError(PayPalError):
    """Transport error or non-2xx answer from the PayPal API."""

    def __init__(
        self,
        operation: str,
        detail: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        debug_id: Optional[str] = None,
    ) -> None:
        super().__init__(operation, detail)
        self.status_code = status_code
        self.body = body
        self.debug_id = debug_id


class ApprovalUrlNotFoundError(PayPalError):
    def __init__(self, operation: str = "create_agreement_token") -> None:
        super().__init__(operation, "Approval URL not found")


class AgreementIdNotFoundError(PayPalError):
    def __init__(self, operation: str = "execute_agreement") -> None:
        super().__init__(operation, "Billing Agreement ID not found")


class PaymentTokenNotReturnedError(PayPalError):
    def __init__(self, operation: str = "charge_customer") -> None:
        super().__init__(operation, "Payment token not returned")


class OrderIdNotFoundError(PayPalError):
    def __init__(self, operation: str = "charge_customer") -> None:
        super().__init__(operation, "Order ID not found")
