"""
HTTP client for the MMPay payment API.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Callable, Dict, Mapping, Optional, Type, Union

import requests

from .config import ClientConfig
from .errors import HTTPStatusError, ResponseDecodeError, TransportError
from .payloads import (
    HandshakeRequest,
    PaymentParameters,
    PaymentRequest,
    canonicalize,
    generate_nonce,
)
from .signing import generate_signature, verify_signature

__all__ = [
    "HANDSHAKE_PATH",
    "HEADER_BTOKEN",
    "HEADER_NONCE",
    "HEADER_SIGNATURE",
    "PAY_PATH",
    "PaymentClient",
    "SANDBOX_HANDSHAKE_PATH",
    "SANDBOX_PAY_PATH",
]

HANDSHAKE_PATH = "/payments/handshake"
SANDBOX_HANDSHAKE_PATH = "/payments/sandbox-handshake"
PAY_PATH = "/payments/create"
SANDBOX_PAY_PATH = "/payments/sandbox-create"

HEADER_NONCE = "X-Mmpay-Nonce"
HEADER_SIGNATURE = "X-Mmpay-Signature"
HEADER_BTOKEN = "X-Mmpay-Btoken"

PayloadLike = Union[HandshakeRequest, Mapping[str, Any]]
ParamsLike = Union[PaymentParameters, Mapping[str, Any], None]


def _post_signed(
    session: requests.Session,
    url: str,
    body: str,
    headers: Dict[str, str],
    timeout: float,
) -> Dict[str, Any]:
    try:
        response = session.post(
            url,
            data=body.encode("utf-8"),
            headers=headers,
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise TransportError(str(exc), url=url) from exc

    if response.status_code >= 300:
        raise HTTPStatusError(
            f"MMPay responded with {response.status_code}: {response.text}",
            url=url,
            status_code=response.status_code,
            body=response.text,
        )
    try:
        data = response.json()
    except ValueError as exc:
        raise ResponseDecodeError(
            f"Failed to parse JSON from MMPay at {url}: {response.text}",
            url=url,
            body=response.text,
        ) from exc
    if not isinstance(data, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object from MMPay at {url}, got {type(data).__name__}",
            url=url,
            body=response.text,
        )
    return data


class PaymentClient:
    """
    Signs and sends handshake and payment requests.

    The session token returned by a handshake is handed straight to the
    payment call that follows it and never stored on the client, so one
    instance can serve concurrent payments.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self._clock = clock

    def __enter__(self) -> "PaymentClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def generate_nonce(self) -> str:
        return generate_nonce(self._clock() if self._clock is not None else None)

    def generate_signature(self, body: str, nonce: str) -> str:
        return generate_signature(body, nonce, self.config.secret_key)

    def _headers(self, nonce: str, signature: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.publishable_key}",
            HEADER_NONCE: nonce,
            HEADER_SIGNATURE: signature,
            "Content-Type": "application/json",
        }

    def _send(
        self,
        path: str,
        body: str,
        nonce: str,
        *,
        btoken: Optional[str] = None,
        include_btoken: bool = False,
    ) -> Dict[str, Any]:
        headers = self._headers(nonce, self.generate_signature(body, nonce))
        if include_btoken:
            if btoken:
                headers[HEADER_BTOKEN] = btoken
            else:
                logging.warning(
                    "Handshake returned no token; sending %s without a btoken", path
                )
        url = self.config.url_for(path)
        logging.info("Submitting signed request to %s", url)
        return _post_signed(self.session, url, body, headers, self.config.timeout_seconds)

    def _handshake(self, path: str, payload: PayloadLike) -> Dict[str, Any]:
        if isinstance(payload, HandshakeRequest):
            payload = payload.to_payload()
        body = canonicalize(dict(payload))
        return self._send(path, body, self.generate_nonce())

    def handshake(self, payload: PayloadLike) -> Dict[str, Any]:
        """Exchange ``payload`` for a session token; returns the decoded response."""
        return self._handshake(HANDSHAKE_PATH, payload)

    def sandbox_handshake(self, payload: PayloadLike) -> Dict[str, Any]:
        return self._handshake(SANDBOX_HANDSHAKE_PATH, payload)

    def build_payment_request(
        self,
        params: ParamsLike = None,
        *,
        nonce: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> PaymentRequest:
        """Validate ``params`` and assemble the payment body without any network I/O."""
        parameters = PaymentParameters.coerce(params, **kwargs)
        return PaymentRequest.build(
            self.config.app_id,
            nonce if nonce is not None else self.generate_nonce(),
            parameters,
            extra=extra,
        )

    def _pay(
        self,
        handshake_path: str,
        pay_path: str,
        params: ParamsLike,
        extra: Optional[Mapping[str, Any]],
        kwargs: Mapping[str, Any],
    ) -> Dict[str, Any]:
        request = self.build_payment_request(params, extra=extra, **kwargs)
        body = canonicalize(request.to_payload())

        handshake = self._handshake(handshake_path, request.handshake_request())
        btoken = handshake.get("token")

        return self._send(
            pay_path,
            body,
            request.nonce,
            btoken=btoken,
            include_btoken=True,
        )

    def pay(
        self,
        params: ParamsLike = None,
        *,
        extra: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """
        Create a payment.

        ``params`` may be a :class:`PaymentParameters`, a mapping using the wire
        keys (``amount``, ``orderId``, ``items``, ``callbackUrl``, ``currency``)
        or omitted in favour of keyword arguments. A handshake always runs
        first; its token is attached to the payment request.
        """
        return self._pay(HANDSHAKE_PATH, PAY_PATH, params, extra, kwargs)

    def sandbox_pay(
        self,
        params: ParamsLike = None,
        *,
        extra: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """Sandbox counterpart of :meth:`pay`."""
        return self._pay(SANDBOX_HANDSHAKE_PATH, SANDBOX_PAY_PATH, params, extra, kwargs)

    def verify_callback(
        self,
        payload: Optional[Union[str, bytes]],
        nonce: Optional[str],
        expected_signature: Optional[str],
    ) -> bool:
        """
        Verify an inbound callback.

        ``payload`` must be the raw request body, ``nonce`` and
        ``expected_signature`` the ``X-Mmpay-Nonce`` and ``X-Mmpay-Signature``
        header values.
        """
        return verify_signature(payload, nonce, expected_signature, self.config.secret_key)

    verify_cb = verify_callback
