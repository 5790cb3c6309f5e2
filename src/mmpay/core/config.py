"""
Configuration objects and helpers for the MMPay client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ConfigError

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "ClientConfig",
    "ConfigError",
    "load_client_config",
]

DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "app_id": "MMPAY_APP_ID",
    "publishable_key": "MMPAY_PUBLISHABLE_KEY",
    "secret_key": "MMPAY_SECRET_KEY",
    "api_base_url": "MMPAY_API_BASE_URL",
    "timeout_seconds": "MMPAY_TIMEOUT_SECONDS",
}


def _require(values: Mapping[str, str], key: str) -> str:
    raw = values.get(key)
    if raw is None or not raw.strip():
        raise ConfigError(f"{key} must be provided")
    return raw.strip()


def _parse_timeout(raw: Any) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"MMPAY_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("MMPAY_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    """
    Credentials and endpoint settings for a :class:`~mmpay.core.client.PaymentClient`.

    ``secret_key`` is only ever used locally to compute HMAC signatures; it is
    never sent to the API. Trailing slashes on ``api_base_url`` are stripped.
    """

    app_id: str
    publishable_key: str
    secret_key: str
    api_base_url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_base_url", (self.api_base_url or "").rstrip("/"))
        for field_name in ("app_id", "publishable_key", "secret_key", "api_base_url"):
            if not getattr(self, field_name):
                raise ConfigError(f"{field_name} must not be empty")
        object.__setattr__(self, "timeout_seconds", _parse_timeout(self.timeout_seconds))

    def url_for(self, path: str) -> str:
        return f"{self.api_base_url}/{path.lstrip('/')}"

    def __repr__(self) -> str:
        return (
            f"ClientConfig(app_id={self.app_id!r}, api_base_url={self.api_base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        return cls(
            app_id=_require(values, "MMPAY_APP_ID"),
            publishable_key=_require(values, "MMPAY_PUBLISHABLE_KEY"),
            secret_key=_require(values, "MMPAY_SECRET_KEY"),
            api_base_url=_require(values, "MMPAY_API_BASE_URL"),
            timeout_seconds=_parse_timeout(
                values.get("MMPAY_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        app_id: Optional[str] = None,
        publishable_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        api_base_url: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
    ) -> "ClientConfig":
        explicit = {
            "app_id": app_id,
            "publishable_key": publishable_key,
            "secret_key": secret_key,
            "api_base_url": api_base_url,
            "timeout_seconds": timeout_seconds,
        }
        merged_overrides: Dict[str, str] = dict(overrides or {})
        for key, value in explicit.items():
            if value is not None:
                merged_overrides[_PARAMETER_TO_ENV_KEY[key]] = str(value)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    app_id: Optional[str] = None,
    publishable_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    api_base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can come from environment variables, a ``.env`` file,
    direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        app_id=app_id,
        publishable_key=publishable_key,
        secret_key=secret_key,
        api_base_url=api_base_url,
        timeout_seconds=timeout_seconds,
    )
