"""Shared pytest fixtures for the MMPay client tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Union

import pytest
import requests

from mmpay import ClientConfig, PaymentClient

SECRET_KEY = "test_secret_key"
FIXED_NOW = 1700000000.1234


def make_response(status: int, body: Union[Dict[str, Any], str], url: str = "") -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status
    raw = body if isinstance(body, str) else json.dumps(body)
    response._content = raw.encode("utf-8")
    response.encoding = "utf-8"
    response.url = url
    return response


class RecordingSession(requests.Session):
    """Session that replays queued responses and records every outgoing request."""

    def __init__(self, responses: List[Union[requests.Response, Exception]]) -> None:
        super().__init__()
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, data: Any = None, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        self.calls.append({"url": url, "data": data, **kwargs})
        outcome = self._responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True
        super().close()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        app_id="test_app_id",
        publishable_key="test_pub_key",
        secret_key=SECRET_KEY,
        api_base_url="https://api.mmpay.com/",
    )


@pytest.fixture
def make_client(config: ClientConfig):
    """Factory returning ``(client, session)`` wired to the queued responses."""

    def _make(*responses: Union[requests.Response, Exception]):
        session = RecordingSession(list(responses))
        client = PaymentClient(config, session=session, clock=lambda: FIXED_NOW)
        return client, session

    return _make
