"""
OAuth2 client-credentials exchange for the PayPal REST API.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import requests

from .config import PayPalConfig
from .errors import AuthenticationFailedError

__all__ = [
    "AuthSession",
    "TOKEN_PATH",
    "fetch_auth_session",
]

TOKEN_PATH = "/v1/oauth2/token"


def _parse_expires_in(raw: Any) -> Optional[int]:
    # informational only, so anything unparseable is dropped
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(float(raw))
    except (TypeError, ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class AuthSession:
    """
    Bearer credentials shared by every call made after authentication.

    ``expires_in`` is kept as reported by PayPal but is not used to refresh
    the token; callers that outlive it must call ``invalidate()`` on the
    client.
    """

    access_token: str
    base_url: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    obtained_at: float = field(default_factory=time.time)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def __repr__(self) -> str:
        return (
            f"AuthSession(base_url={self.base_url!r}, token_type={self.token_type!r}, "
            f"expires_in={self.expires_in!r})"
        )

    @classmethod
    def from_response(
        cls,
        payload: Mapping[str, Any],
        base_url: str,
        *,
        operation: str = "authenticate",
    ) -> "AuthSession":
        access_token = payload.get("access_token")
        if not access_token:
            raise AuthenticationFailedError(
                "Failed to retrieve access token", operation=operation
            )

        return cls(
            access_token=str(access_token),
            base_url=base_url,
            token_type=str(payload.get("token_type") or "Bearer"),
            expires_in=_parse_expires_in(payload.get("expires_in")),
        )


def fetch_auth_session(
    session: requests.Session,
    config: PayPalConfig,
    *,
    operation: str = "authenticate",
) -> AuthSession:
    """
    Exchange the configured client id/secret for a bearer token.

    ``operation`` names the client call that needed the token and is carried
    by any :class:`AuthenticationFailedError` raised here.
    """
    token_url = f"{config.base_url}{TOKEN_PATH}"
    logging.info("Requesting PayPal access token from %s", token_url)
    try:
        response = session.post(
            token_url,
            data={"grant_type": "client_credentials"},
            auth=(config.client_id, config.client_secret),
            headers={"Accept": "application/json"},
            timeout=config.timeout_seconds,
        )
    except requests.RequestException as exc:
        raise AuthenticationFailedError(
            f"Authentication failed: {exc}", operation=operation
        ) from exc

    if not 200 <= response.status_code < 300:
        raise AuthenticationFailedError(
            f"Authentication failed with {response.status_code}: {response.text}",
            status_code=response.status_code,
            operation=operation,
        )

    try:
        payload = response.json()
    except (json.JSONDecodeError, ValueError) as exc:
        raise AuthenticationFailedError(
            f"Failed to parse token response from {token_url}: {response.text}",
            status_code=response.status_code,
            operation=operation,
        ) from exc

    if not isinstance(payload, dict):
        raise AuthenticationFailedError(
            "Failed to retrieve access token", operation=operation
        )

    return AuthSession.from_response(payload, config.base_url, operation=operation)
