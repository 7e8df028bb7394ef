"""Tests for the high-level helpers."""

import pytest

from paypal_agreements import (
    PayPalAgreementClient,
    PayPalConfig,
    charge_agreement,
    create_agreement_client,
)

from .conftest import make_response

CREDENTIALS = {"PAYPAL_CLIENT_ID": "client-id", "PAYPAL_CLIENT_SECRET": "client-secret"}


def test_create_client_from_config(config, session):
    client = create_agreement_client(config=config, session=session)

    assert isinstance(client, PayPalAgreementClient)
    assert client.config is config
    assert client.session is session


def test_create_client_from_environment(session):
    client = create_agreement_client(
        env_file=None,
        base=CREDENTIALS,
        sandbox=False,
        session=session,
    )

    assert client.config == PayPalConfig.for_environment(
        "client-id", "client-secret", sandbox=False
    )


def test_config_and_parameters_are_exclusive(config):
    with pytest.raises(ValueError, match="not both"):
        create_agreement_client(config=config, client_id="other-id")


def test_charge_agreement_runs_reference_transaction(config, session):
    session.route("/v3/vault/payment-tokens", make_response(201, {"id": "TOK1"}))
    session.route(
        "/v2/checkout/orders",
        make_response(201, {"id": "ORDER1", "status": "COMPLETED"}),
    )

    order = charge_agreement("AG1", "55.00", payer_id="PAYER1", config=config, session=session)

    assert order == {"id": "ORDER1", "status": "COMPLETED"}
    assert session.paths == [
        "/v1/oauth2/token",
        "/v3/vault/payment-tokens",
        "/v2/checkout/orders",
    ]
