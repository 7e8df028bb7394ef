"""
Public facade for the PayPal billing-agreement helper package.

The most useful pieces are re-exported here so integrators can
``from paypal_agreements import ...`` without navigating the package.
"""

from .api import charge_agreement, create_agreement_client
from .core import (
    Agreement,
    AgreementIdNotFoundError,
    ApprovalUrlNotFoundError,
    AuthSession,
    AuthenticationFailedError,
    ClientEnvironment,
    ConfigError,
    ConfigParameters,
    NotConfiguredError,
    OrderIdNotFoundError,
    PayPalAgreementClient,
    PayPalConfig,
    PayPalError,
    PaymentTokenNotReturnedError,
    RequestFailedError,
    build_environment,
    load_env_file,
    load_paypal_config,
)

__all__ = (
    "Agreement",
    "AgreementIdNotFoundError",
    "ApprovalUrlNotFoundError",
    "AuthSession",
    "AuthenticationFailedError",
    "ClientEnvironment",
    "ConfigError",
    "ConfigParameters",
    "NotConfiguredError",
    "OrderIdNotFoundError",
    "PayPalAgreementClient",
    "PayPalConfig",
    "PayPalError",
    "PaymentTokenNotReturnedError",
    "RequestFailedError",
    "build_environment",
    "charge_agreement",
    "create_agreement_client",
    "load_env_file",
    "load_paypal_config",
)
