"""
HMAC-SHA256 request signing and callback verification.

The string to sign is ``"<nonce>.<body>"`` where ``body`` is the exact request
body. Re-serializing the body between signing and sending (or between
receiving and verifying) breaks the signature.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional, Union

__all__ = ["generate_signature", "verify_signature"]

BodyLike = Union[str, bytes]


def _to_bytes(value: BodyLike) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


def generate_signature(body: BodyLike, nonce: str, secret_key: str) -> str:
    """Lowercase hex HMAC-SHA256 of ``nonce + "." + body`` keyed with ``secret_key``."""
    string_to_sign = _to_bytes(nonce) + b"." + _to_bytes(body)
    return hmac.new(_to_bytes(secret_key), string_to_sign, hashlib.sha256).hexdigest()


def verify_signature(
    payload: Optional[BodyLike],
    nonce: Optional[str],
    signature: Optional[str],
    secret_key: str,
) -> bool:
    """
    Check a callback signature in constant time.

    Any empty or missing input yields ``False`` instead of raising.
    """
    if not payload or not nonce or not signature:
        return False

    expected = generate_signature(payload, nonce, secret_key)
    return hmac.compare_digest(expected.encode("ascii"), _to_bytes(signature))
