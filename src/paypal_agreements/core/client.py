"""
HTTP client for the PayPal billing-agreement and reference-transaction APIs.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from .config import DEFAULT_TIMEOUT_SECONDS, PayPalConfig
from .errors import (
    AgreementIdNotFoundError,
    ApprovalUrlNotFoundError,
    NotConfiguredError,
    OrderIdNotFoundError,
    PaymentTokenNotReturnedError,
    RequestFailedError,
)
from .payloads import (
    build_agreement_token_request,
    build_execute_agreement_request,
    build_order_request,
    build_payment_token_request,
)
from .session import AuthSession, fetch_auth_session

__all__ = [
    "AGREEMENTS_PATH",
    "AGREEMENT_TOKENS_PATH",
    "Agreement",
    "ORDERS_PATH",
    "PAYMENT_TOKENS_PATH",
    "PayPalAgreementClient",
    "charge_customer",
    "create_agreement_token",
    "create_order",
    "create_payment_token",
    "execute_agreement",
]

AGREEMENT_TOKENS_PATH = "/v1/billing-agreements/agreement-tokens"
AGREEMENTS_PATH = "/v1/billing-agreements/agreements"
PAYMENT_TOKENS_PATH = "/v3/vault/payment-tokens"
ORDERS_PATH = "/v2/checkout/orders"


def _debug_id(response: requests.Response) -> Optional[str]:
    debug_id = response.headers.get("PayPal-Debug-Id")
    if debug_id:
        return debug_id
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        return payload.get("debug_id")
    return None


def _post_json(
    session: requests.Session,
    auth: AuthSession,
    path: str,
    body: Dict[str, Any],
    *,
    operation: str,
    timeout: float,
) -> Dict[str, Any]:
    url = auth.url(path)
    try:
        response = session.post(url, json=body, headers=auth.headers, timeout=timeout)
    except requests.RequestException as exc:
        raise RequestFailedError(operation, f"Request failed: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise RequestFailedError(
            operation,
            f"PayPal responded with {response.status_code}: {response.text}",
            status_code=response.status_code,
            body=response.text,
            debug_id=_debug_id(response),
        )

    if not response.content:
        return {}
    try:
        payload = response.json()
    except (json.JSONDecodeError, ValueError) as exc:
        raise RequestFailedError(
            operation,
            f"Failed to parse JSON from PayPal at {url}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        ) from exc
    return payload if isinstance(payload, dict) else {}


def create_agreement_token(
    session: requests.Session,
    auth: AuthSession,
    return_url: str,
    cancel_url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    now: Optional[datetime] = None,
) -> str:
    """
    Create a billing-agreement token and return the payer approval URL.
    """
    operation = "create_agreement_token"
    logging.info("Creating billing agreement token at %s", auth.url(AGREEMENT_TOKENS_PATH))
    payload = _post_json(
        session,
        auth,
        AGREEMENT_TOKENS_PATH,
        build_agreement_token_request(return_url, cancel_url, now=now),
        operation=operation,
        timeout=timeout,
    )

    for link in payload.get("links") or ():
        if isinstance(link, dict) and link.get("rel") == "approval_url" and link.get("href"):
            return link["href"]
    raise ApprovalUrlNotFoundError(operation)


@dataclass(frozen=True)
class Agreement:
    id: str
    payer_id: Optional[str]
    raw: Dict[str, Any]

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Agreement":
        agreement_id = payload.get("id")
        if not agreement_id:
            raise AgreementIdNotFoundError()

        payer = payload.get("payer")
        payer_info = payer.get("payer_info") if isinstance(payer, dict) else None
        if not isinstance(payer_info, dict):
            payer_info = {}
        return cls(
            id=agreement_id,
            payer_id=payer_info.get("payer_id"),
            raw=payload,
        )

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {"id": self.id, "payer_id": self.payer_id}


def execute_agreement(
    session: requests.Session,
    auth: AuthSession,
    token: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Agreement:
    """
    Turn an approved agreement token into a billing agreement.

    A token can only be executed once; PayPal rejects a second attempt and
    that rejection surfaces as :class:`RequestFailedError`.
    """
    logging.info("Executing billing agreement at %s", auth.url(AGREEMENTS_PATH))
    payload = _post_json(
        session,
        auth,
        AGREEMENTS_PATH,
        build_execute_agreement_request(token),
        operation="execute_agreement",
        timeout=timeout,
    )
    return Agreement.from_response(payload)


def create_payment_token(
    session: requests.Session,
    auth: AuthSession,
    agreement_id: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    operation: str = "create_payment_token",
) -> str:
    logging.info("Requesting vault payment token at %s", auth.url(PAYMENT_TOKENS_PATH))
    payload = _post_json(
        session,
        auth,
        PAYMENT_TOKENS_PATH,
        build_payment_token_request(agreement_id),
        operation=operation,
        timeout=timeout,
    )
    payment_token = payload.get("id")
    if not payment_token:
        raise PaymentTokenNotReturnedError(operation)
    return payment_token


def create_order(
    session: requests.Session,
    auth: AuthSession,
    payment_token: str,
    amount: str,
    currency: str = "USD",
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    operation: str = "create_order",
) -> Dict[str, Any]:
    logging.info("Creating order for %s %s at %s", amount, currency, auth.url(ORDERS_PATH))
    payload = _post_json(
        session,
        auth,
        ORDERS_PATH,
        build_order_request(payment_token, amount, currency),
        operation=operation,
        timeout=timeout,
    )
    if not payload.get("id"):
        raise OrderIdNotFoundError(operation)
    return payload


def charge_customer(
    session: requests.Session,
    auth: AuthSession,
    payer_id: Optional[str],
    agreement_id: str,
    amount: str,
    currency: str = "USD",
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Dict[str, Any]:
    """
    Charge ``amount`` against an executed billing agreement.

    The agreement is first exchanged for a payment-method token, then an
    order is created and captured with it. The two calls are not atomic: if
    the order fails, the minted token is simply abandoned.

    ``payer_id`` is not sent to PayPal; the agreement already identifies the
    payer.
    """
    operation = "charge_customer"
    logging.info("Charging agreement %s for payer %s", agreement_id, payer_id)
    payment_token = create_payment_token(
        session, auth, agreement_id, timeout=timeout, operation=operation
    )
    return create_order(
        session,
        auth,
        payment_token,
        amount,
        currency,
        timeout=timeout,
        operation=operation,
    )


class PayPalAgreementClient:
    """
    Facade over the agreement workflow holding the configuration and the
    cached bearer session.

    The bearer token is fetched lazily on first use and reused until
    :meth:`invalidate` or :meth:`configure` is called.
    """

    def __init__(
        self,
        config: Optional[PayPalConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self._auth: Optional[AuthSession] = None
        self._auth_lock = threading.Lock()

    def configure(
        self,
        client_id: str,
        client_secret: str,
        sandbox: bool = True,
    ) -> PayPalConfig:
        """
        Point the client at the sandbox or live API with new credentials.

        Any cached bearer token is dropped.
        """
        timeout = self.config.timeout_seconds if self.config else DEFAULT_TIMEOUT_SECONDS
        config = PayPalConfig.for_environment(
            client_id, client_secret, sandbox, timeout_seconds=timeout
        )
        with self._auth_lock:
            self.config = config
            self._auth = None
        return config

    def invalidate(self) -> None:
        with self._auth_lock:
            self._auth = None

    def _require_config(self, operation: str) -> PayPalConfig:
        if self.config is None:
            raise NotConfiguredError(operation)
        return self.config

    def get_auth_session(self, *, operation: str = "get_auth_session") -> AuthSession:
        auth = self._auth
        if auth is not None:
            return auth

        with self._auth_lock:
            if self._auth is None:
                config = self._require_config(operation)
                self._auth = fetch_auth_session(
                    self.session, config, operation=operation
                )
            return self._auth

    @property
    def timeout(self) -> float:
        return self.config.timeout_seconds if self.config else DEFAULT_TIMEOUT_SECONDS

    def create_agreement_token(
        self,
        return_url: str,
        cancel_url: str,
        *,
        now: Optional[datetime] = None,
    ) -> str:
        auth = self.get_auth_session(operation="create_agreement_token")
        return create_agreement_token(
            self.session,
            auth,
            return_url,
            cancel_url,
            timeout=self.timeout,
            now=now,
        )

    def execute_agreement(self, token: str) -> Agreement:
        auth = self.get_auth_session(operation="execute_agreement")
        return execute_agreement(self.session, auth, token, timeout=self.timeout)

    def charge_customer(
        self,
        payer_id: Optional[str],
        agreement_id: str,
        amount: str,
        currency: str = "USD",
    ) -> Dict[str, Any]:
        auth = self.get_auth_session(operation="charge_customer")
        return charge_customer(
            self.session,
            auth,
            payer_id,
            agreement_id,
            amount,
            currency,
            timeout=self.timeout,
        )
