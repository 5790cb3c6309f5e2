"""
Minimal script that uses the public API to create a sandbox payment.
"""

from __future__ import annotations

import argparse
import logging
import sys

from mmpay import ConfigError, MMPayError, PaymentItem, create_payment_client, load_client_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an MMPay sandbox payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing MMPAY_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--order-id", default="ORD-123", help="Merchant order identifier")
    parser.add_argument("--amount", type=int, default=1000, help="Total amount")
    parser.add_argument(
        "--callback-url",
        help="URL that receives the signed payment callback",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_payment_client(config=config) as client:
        logging.info("Creating sandbox payment against %s", config.api_base_url)
        try:
            response = client.sandbox_pay(
                amount=args.amount,
                order_id=args.order_id,
                items=[PaymentItem(name="Item 1", amount=args.amount, quantity=1)],
                callback_url=args.callback_url,
            )
        except MMPayError as exc:
            logging.error("Payment request failed: %s", exc)
            return 1

    logging.info("Payment created: status=%s url=%s", response.get("status"), response.get("url"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
