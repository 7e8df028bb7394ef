"""
Core primitives that implement the PayPal billing-agreement lifecycle.
"""

from .client import (
    Agreement,
    PayPalAgreementClient,
    charge_customer,
    create_agreement_token,
    create_order,
    create_payment_token,
    execute_agreement,
)
from .config import (
    ConfigError,
    ConfigParameters,
    PayPalConfig,
    load_paypal_config,
)
from .environment import ClientEnvironment, build_environment, load_env_file
from .errors import (
    AgreementIdNotFoundError,
    ApprovalUrlNotFoundError,
    AuthenticationFailedError,
    NotConfiguredError,
    OrderIdNotFoundError,
    PayPalError,
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
    "build_agreement_token_request",
    "build_environment",
    "build_execute_agreement_request",
    "build_order_request",
    "build_payment_token_request",
    "charge_customer",
    "create_agreement_token",
    "create_order",
    "create_payment_token",
    "execute_agreement",
    "fetch_auth_session",
    "load_env_file",
    "load_paypal_config",
]
