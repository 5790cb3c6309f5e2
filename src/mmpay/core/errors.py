"""
Exception types raised by the MMPay client.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ConfigError",
    "HTTPStatusError",
    "MMPayError",
    "MissingParameterError",
    "ResponseDecodeError",
    "TransportError",
]


class MMPayError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(MMPayError):
    """Raised when the supplied configuration is invalid."""


class MissingParameterError(MMPayError, ValueError):
    """Raised before any network call when required payment fields are absent."""


class TransportError(MMPayError):
    """
    The request never produced a usable HTTP response.

    The message is the one reported by the underlying HTTP library and the
    original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class HTTPStatusError(TransportError):
    """The payment API answered with a non-2xx status code."""

    def __init__(self, message: str, *, url: str, status_code: int, body: str) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code
        self.body = body


class ResponseDecodeError(MMPayError):
    """The payment API answered, but the body was not a JSON object."""

    def __init__(self, message: str, *, url: str, body: str) -> None:
        super().__init__(message)
        self.url = url
        self.body = body
