"""
Helpers for constructing and serializing the JSON bodies sent to the MMPay API.

Signatures are computed over the exact body bytes, so serialization has to be
reproducible across the MMPay SDKs: compact separators, key insertion order,
unescaped slashes and unescaped non-ASCII text.
"""

from __future__ import annotations

import json
import time
from decimal import ROUND_HALF_UP, Decimal
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .errors import MissingParameterError

__all__ = [
    "HandshakeRequest",
    "PaymentItem",
    "PaymentParameters",
    "PaymentRequest",
    "canonicalize",
    "generate_nonce",
]

_LINE_TERMINATORS = {"\u2028": "\\u2028", "\u2029": "\\u2029"}


def _encode_default(value: Any) -> Any:
    to_payload = getattr(value, "to_payload", None)
    if callable(to_payload):
        return to_payload()
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def canonicalize(payload: Any) -> str:
    """
    Serialize ``payload`` into the canonical JSON string that gets signed and sent.

    U+2028 and U+2029 stay escaped even though other non-ASCII characters are
    emitted literally; the server-side encoder does the same.
    """
    body = json.dumps(
        payload,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
        default=_encode_default,
    )
    for char, escaped in _LINE_TERMINATORS.items():
        body = body.replace(char, escaped)
    try:
        body.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"Payload is not valid UTF-8 text: {exc}") from exc
    return body


def generate_nonce(now: Optional[float] = None) -> str:
    """Current wall-clock time in whole milliseconds, as a decimal string."""
    seconds = time.time() if now is None else now
    # Halves round away from zero, like the other MMPay SDKs.
    millis = (Decimal(str(seconds)) * 1000).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return str(int(millis))


def _merge_extra(payload: Dict[str, Any], extra: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in extra.items():
        if key in payload:
            raise ValueError(f"Extra field '{key}' collides with a reserved field")
        payload[key] = value
    return payload


@dataclass(frozen=True)
class PaymentItem:
    name: str
    amount: Union[int, float]
    quantity: int

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "amount": self.amount, "quantity": self.quantity}


ItemLike = Union[PaymentItem, Mapping[str, Any]]


def _item_payload(item: ItemLike) -> Dict[str, Any]:
    if isinstance(item, PaymentItem):
        return item.to_payload()
    return dict(item)


@dataclass(frozen=True)
class PaymentParameters:
    """
    Caller-supplied input for a payment.

    ``amount``, ``order_id`` and ``items`` are required; ``callback_url`` and
    ``currency`` are only serialized when set.
    """

    amount: Union[int, float]
    order_id: str
    items: Sequence[ItemLike]
    callback_url: Optional[str] = None
    currency: Optional[str] = None

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("amount", "order_id", "items")
            if getattr(self, name) is None
        ]
        if missing:
            raise MissingParameterError(
                f"Missing required payment parameter(s): {', '.join(missing)}"
            )

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "PaymentParameters":
        """Accept either the wire keys (``orderId``) or the Python ones (``order_id``)."""
        return cls(
            amount=params.get("amount"),
            order_id=params.get("orderId", params.get("order_id")),
            items=params.get("items"),
            callback_url=params.get("callbackUrl", params.get("callback_url")),
            currency=params.get("currency"),
        )

    @classmethod
    def coerce(
        cls,
        params: Union["PaymentParameters", Mapping[str, Any], None] = None,
        **kwargs: Any,
    ) -> "PaymentParameters":
        if isinstance(params, PaymentParameters):
            if kwargs:
                raise TypeError("Pass either PaymentParameters or keyword arguments, not both")
            return params
        merged: Dict[str, Any] = dict(params or {})
        merged.update(kwargs)
        return cls.from_mapping(merged)


@dataclass(frozen=True)
class PaymentRequest:
    app_id: str
    nonce: str
    amount: Union[int, float]
    order_id: str
    items: Sequence[ItemLike]
    callback_url: Optional[str] = None
    currency: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        app_id: str,
        nonce: str,
        params: PaymentParameters,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> "PaymentRequest":
        return cls(
            app_id=app_id,
            nonce=nonce,
            amount=params.amount,
            order_id=params.order_id,
            items=params.items,
            callback_url=params.callback_url,
            currency=params.currency,
            extra=dict(extra or {}),
        )

    def to_payload(self) -> Dict[str, Any]:
        # Key order is part of the signed bytes.
        payload: Dict[str, Any] = {
            "appId": self.app_id,
            "nonce": self.nonce,
            "amount": self.amount,
            "orderId": self.order_id,
            "items": [_item_payload(item) for item in self.items],
        }
        if self.callback_url is not None:
            payload["callbackUrl"] = self.callback_url
        if self.currency is not None:
            payload["currency"] = self.currency
        return _merge_extra(payload, self.extra)

    def handshake_request(self) -> "HandshakeRequest":
        return HandshakeRequest(order_id=self.order_id, nonce=self.nonce)


@dataclass(frozen=True)
class HandshakeRequest:
    order_id: str
    nonce: str
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return _merge_extra({"orderId": self.order_id, "nonce": self.nonce}, self.extra)
