"""
Command-line interface for exercising the MMPay APIs.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

import requests

from .api import create_payment_client, verify_callback
from .core.client import PaymentClient
from .core.config import load_client_config
from .core.environment import build_environment
from .core.errors import ConfigError, MMPayError
from .core.payloads import PaymentItem, canonicalize


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
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _number(value: str) -> Union[int, float]:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from exc


def _item(value: str) -> PaymentItem:
    parts = value.rsplit(":", 2)
    if len(parts) != 3 or not parts[0]:
        raise argparse.ArgumentTypeError("Items must look like NAME:AMOUNT:QUANTITY")
    name, amount, quantity = parts
    try:
        qty = int(quantity)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Quantity '{quantity}' is not an integer") from exc
    return PaymentItem(name=name, amount=_number(amount), quantity=qty)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mmpay",
        description="Send signed requests to the MMPay payment API",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing MMPAY_* settings (default: .env)",
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

    handshake = commands.add_parser("handshake", help="Request a session token")
    handshake.add_argument("--order-id", required=True)
    handshake.add_argument("--sandbox", action="store_true", help="Use the sandbox endpoint")

    pay = commands.add_parser("pay", help="Create a payment (handshake included)")
    pay.add_argument("--order-id", required=True)
    pay.add_argument("--amount", required=True, type=_number)
    pay.add_argument(
        "--item",
        action="append",
        type=_item,
        required=True,
        metavar="NAME:AMOUNT:QUANTITY",
        help="Line item; repeat for several items",
    )
    pay.add_argument("--callback-url")
    pay.add_argument("--currency")
    pay.add_argument("--sandbox", action="store_true", help="Use the sandbox endpoints")
    pay.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the signed body and signature without contacting the API",
    )

    verify = commands.add_parser("verify-callback", help="Check a callback signature")
    verify.add_argument("--nonce", required=True, help="X-Mmpay-Nonce header value")
    verify.add_argument("--signature", required=True, help="X-Mmpay-Signature header value")
    source = verify.add_mutually_exclusive_group(required=True)
    source.add_argument("--payload", help="Raw callback body")
    source.add_argument("--payload-file", help="File holding the raw callback body")
    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    session: Optional[requests.Session] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    if args.command == "verify-callback":
        environment = build_environment(env_file=args.env_file, overrides=overrides)
        secret_key = (environment.get("MMPAY_SECRET_KEY") or "").strip()
        if not secret_key:
            logging.error("Invalid configuration: MMPAY_SECRET_KEY must be provided")
            return 1
        return _verify_callback(secret_key, args)

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_payment_client(config=config, session=session)
    with client:
        if args.command == "handshake":
            return _handshake(client, args)
        return _pay(client, args)


def _verify_callback(secret_key: str, args: argparse.Namespace) -> int:
    if args.payload_file is not None:
        payload: Union[str, bytes] = Path(args.payload_file).read_bytes()
    else:
        payload = args.payload
    if verify_callback(payload, args.nonce, args.signature, secret_key=secret_key):
        print("valid")
        return 0
    print("invalid")
    return 1


def _handshake(client: PaymentClient, args: argparse.Namespace) -> int:
    payload = {"orderId": args.order_id, "nonce": client.generate_nonce()}
    call = client.sandbox_handshake if args.sandbox else client.handshake
    try:
        response = call(payload)
    except MMPayError as exc:
        logging.error("Handshake request failed: %s", exc)
        return 1
    _print_json(response)
    return 0


def _pay(client: PaymentClient, args: argparse.Namespace) -> int:
    params: Dict[str, Any] = {
        "amount": args.amount,
        "orderId": args.order_id,
        "items": args.item,
        "callbackUrl": args.callback_url,
        "currency": args.currency,
    }

    if args.dry_run:
        request = client.build_payment_request(params)
        body = canonicalize(request.to_payload())
        _print_json(
            {
                "nonce": request.nonce,
                "body": body,
                "signature": client.generate_signature(body, request.nonce),
            }
        )
        return 0

    call = client.sandbox_pay if args.sandbox else client.pay
    try:
        response = call(params)
    except MMPayError as exc:
        logging.error("Payment request failed: %s", exc)
        return 1

    logging.info("Payment created for order %s", args.order_id)
    _print_json(response)
    return 0
