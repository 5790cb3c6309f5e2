"""
Public, high-level helpers for interacting with the MMPay API.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

import requests

from .core.client import PaymentClient
from .core.config import ClientConfig, load_client_config
from .core.signing import verify_signature

__all__ = [
    "create_payment_client",
    "verify_callback",
]


def create_payment_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    app_id: Optional[str] = None,
    publishable_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    api_base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> PaymentClient:
    """
    Construct a :class:`PaymentClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            app_id,
            publishable_key,
            secret_key,
            api_base_url,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            app_id=app_id,
            publishable_key=publishable_key,
            secret_key=secret_key,
            api_base_url=api_base_url,
            timeout_seconds=timeout_seconds,
        )
    return PaymentClient(cfg, session=session)


def verify_callback(
    payload: Optional[Union[str, bytes]],
    nonce: Optional[str],
    signature: Optional[str],
    *,
    secret_key: str,
) -> bool:
    """
    Verify a callback without building a client.

    Useful in webhook handlers that only hold the secret key.
    """
    return verify_signature(payload, nonce, signature, secret_key)
