"""
Core primitives that implement the MMPay request-signing lifecycle.
"""

from .client import (
    HANDSHAKE_PATH,
    HEADER_BTOKEN,
    HEADER_NONCE,
    HEADER_SIGNATURE,
    PAY_PATH,
    SANDBOX_HANDSHAKE_PATH,
    SANDBOX_PAY_PATH,
    PaymentClient,
)
from .config import ClientConfig, load_client_config
from .environment import ClientEnvironment, build_environment
from .errors import (
    ConfigError,
    HTTPStatusError,
    MissingParameterError,
    MMPayError,
    ResponseDecodeError,
    TransportError,
)
from .payloads import (
    HandshakeRequest,
    PaymentItem,
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
    "SANDBOX_HANDSHAKE_PATH",
    "SANDBOX_PAY_PATH",
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
    "generate_nonce",
    "generate_signature",
    "load_client_config",
    "verify_signature",
]
