"""
Walk through the billing-agreement flow using the public API.

Run it twice: first without ``--token`` to get the approval URL, then, after
approving in the browser, with the ``token`` PayPal appended to the return URL.
"""

from __future__ import annotations

import argparse
import logging
import sys

from paypal_agreements import (
    ConfigError,
    PayPalError,
    create_agreement_client,
    load_paypal_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a PayPal reference transaction")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYPAL_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help="Use the live API instead of the sandbox",
    )
    parser.add_argument("--return-url", default="https://example.com/success")
    parser.add_argument("--cancel-url", default="https://example.com/cancel")
    parser.add_argument(
        "--token",
        help="Approved agreement token; when given, execute and charge it",
    )
    parser.add_argument("--amount", default="55.00")
    parser.add_argument("--currency", default="USD")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_paypal_config(
            env_file=args.env_file,
            sandbox=False if args.live else None,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_agreement_client(config=config)

    if args.token is None:
        try:
            approval_url = client.create_agreement_token(args.return_url, args.cancel_url)
        except PayPalError as exc:
            logging.error("Could not create agreement token: %s", exc)
            return 1
        logging.info("Send the payer to %s", approval_url)
        return 0

    try:
        agreement = client.execute_agreement(args.token)
        logging.info("Agreement %s executed for payer %s", agreement.id, agreement.payer_id)
        order = client.charge_customer(
            agreement.payer_id, agreement.id, args.amount, args.currency
        )
    except PayPalError as exc:
        logging.error("Reference transaction failed: %s", exc)
        return 1

    logging.info("Order %s finished with status %s", order["id"], order.get("status"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
