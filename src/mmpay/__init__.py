"""
Public facade for the MMPay client SDK.

The most useful pieces are re-exported here so integrators can
``from mmpay import ...`` without navigating the package.
"""

from .api import create_payment_client, verify_callback
from .core import (
    ClientConfig,
    ClientEnvironment,
    ConfigError,
    HandshakeRequest,
    HTTPStatusError,
    MissingParameterError,
    MMPayError,
    PaymentClient,
    PaymentItem,
    PaymentParameters,
    PaymentRequest,
    ResponseDecodeError,
    TransportError,
    build_environment,
    canonicalize,
    generate_nonce,
    generate_signature,
    load_client_config,
    verify_signature,
)

__version__ = "1.0.0"

__all__ = (
    "ClientConfig",
    "ClientEnvironment",
    "ConfigError",
    "HTTPStatusError",
    "HandshakeRequest",
    "MMPayError",
    "MissingParameterError",
    "PaymentClient",
    "PaymentItem",
    "PaymentParameters",
    "PaymentRequest",
    "ResponseDecodeError",
    "TransportError",
    "build_environment",
    "canonicalize",
    "create_payment_client",
    "generate_nonce",
    "generate_signature",
    "load_client_config",
    "verify_callback",
    "verify_signature",
)
