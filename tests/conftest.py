"""Shared fixtures for the PayPal agreement client tests."""

import json
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import pytest
import requests

from paypal_agreements import PayPalAgreementClient, PayPalConfig

TOKEN_PAYLOAD = {
    "scope": "https://uri.paypal.com/services/payments/payment",
    "access_token": "A21AAtest-access-token",
    "token_type": "Bearer",
    "app_id": "APP-80W284485P519543T",
    "expires_in": 32400,
}


def make_response(
    status_code: int = 200,
    payload: Any = None,
    *,
    text: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Build a real ``requests.Response`` carrying ``payload`` as JSON."""
    if text is None:
        text = "" if payload is None else json.dumps(payload)
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    if headers:
        response.headers.update(headers)
    return response


class FakeSession:
    """
    Stand-in for ``requests.Session`` that answers POSTs by URL path.

    Each path holds a queue of responses (or exceptions to raise); the last
    entry is reused once the queue is drained.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.routes: Dict[str, List[Any]] = {}

    def route(self, path: str, *responses: Any) -> "FakeSession":
        self.routes.setdefault(path, []).extend(responses)
        return self

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append((url, kwargs))
        queue = self.routes.get(urlsplit(url).path)
        if not queue:
            raise AssertionError(f"Unexpected POST to {url}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def paths(self) -> List[str]:
        return [urlsplit(url).path for url, _ in self.calls]

    def calls_to(self, path: str) -> List[Tuple[str, Dict[str, Any]]]:
        return [call for call in self.calls if urlsplit(call[0]).path == path]


@pytest.fixture
def session():
    fake = FakeSession()
    fake.route("/v1/oauth2/token", make_response(200, TOKEN_PAYLOAD))
    return fake


@pytest.fixture
def config():
    return PayPalConfig.for_environment("client-id", "client-secret", sandbox=True)


@pytest.fixture
def client(config, session):
    return PayPalAgreementClient(config, session=session)
