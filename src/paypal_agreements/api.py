"""
Public, high-level helpers for running the PayPal agreement workflow.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import requests

from .core.client import Agreement, PayPalAgreementClient
from .core.config import (
    ConfigError,
    ConfigParameters,
    PayPalConfig,
    load_paypal_config,
)
from .core.environment import ClientEnvironment, build_environment, load_env_file

__all__ = [
    "Agreement",
    "ClientEnvironment",
    "ConfigError",
    "ConfigParameters",
    "PayPalAgreementClient",
    "PayPalConfig",
    "build_environment",
    "charge_agreement",
    "create_agreement_client",
    "load_env_file",
    "load_paypal_config",
]


def _resolve_config(
    config: Optional[PayPalConfig],
    *,
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    parameters: Optional[ConfigParameters],
    client_id: Optional[str],
    client_secret: Optional[str],
    sandbox: Optional[bool | str],
    base_url: Optional[str],
    timeout_seconds: Optional[float | int | str],
) -> PayPalConfig:
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            client_id,
            client_secret,
            sandbox,
            base_url,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built PayPalConfig or individual parameters, not both."
            )
        return config

    return load_paypal_config(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        client_id=client_id,
        client_secret=client_secret,
        sandbox=sandbox,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )


def create_agreement_client(
    *,
    config: Optional[PayPalConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ConfigParameters] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    sandbox: Optional[bool | str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> PayPalAgreementClient:
    """
    Construct a configured :class:`PayPalAgreementClient`.

    Callers can either supply a ready-made :class:`PayPalConfig` or let the
    helper assemble one from environment data.
    """
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        client_id=client_id,
        client_secret=client_secret,
        sandbox=sandbox,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )
    return PayPalAgreementClient(cfg, session=session)


def charge_agreement(
    agreement_id: str,
    amount: str,
    *,
    payer_id: Optional[str] = None,
    currency: str = "USD",
    config: Optional[PayPalConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ConfigParameters] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    sandbox: Optional[bool | str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> Dict[str, Any]:
    """
    One-shot reference transaction: authenticate, then charge the agreement.
    """
    client = create_agreement_client(
        config=config,
        session=session,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        client_id=client_id,
        client_secret=client_secret,
        sandbox=sandbox,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )
    return client.charge_customer(payer_id, agreement_id, amount, currency)
