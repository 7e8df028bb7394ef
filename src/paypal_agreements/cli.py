"""
Command-line interface for exercising the PayPal agreement workflow.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Iterable, Sequence, Tuple

import requests

from .api import ConfigError, PayPalAgreementClient, create_agreement_client, load_paypal_config
from .core.errors import PayPalError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paypal-agreements",
        description="Create, execute and charge PayPal billing agreements",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYPAL_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser(
        "create-token",
        help="Create an agreement token and print the approval URL",
    )
    create.add_argument("--return-url", required=True)
    create.add_argument("--cancel-url", required=True)

    execute = commands.add_parser(
        "execute",
        help="Execute an approved agreement token",
    )
    execute.add_argument("--token", required=True)

    charge = commands.add_parser(
        "charge",
        help="Charge an executed agreement with a reference transaction",
    )
    charge.add_argument("--agreement-id", required=True)
    charge.add_argument("--amount", required=True, help="Decimal string, e.g. 55.00")
    charge.add_argument("--payer-id", default=None)
    charge.add_argument("--currency", default="USD")
    return parser


def _emit(value: Any) -> None:
    if isinstance(value, str):
        print(value)
    else:
        print(json.dumps(value, indent=2, sort_keys=True))


def _dispatch(client: PayPalAgreementClient, args: argparse.Namespace) -> Any:
    if args.command == "create-token":
        return client.create_agreement_token(args.return_url, args.cancel_url)
    if args.command == "execute":
        return client.execute_agreement(args.token).as_dict()
    return client.charge_customer(
        args.payer_id, args.agreement_id, args.amount, args.currency
    )


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_paypal_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_agreement_client(config=config, session=requests.Session())
    logging.info("Using PayPal API at %s", config.base_url)

    try:
        result = _dispatch(client, args)
    except PayPalError as exc:
        logging.error("PayPal request failed: %s", exc)
        return 1

    _emit(result)
    return 0


def main() -> None:
    sys.exit(run_cli())
