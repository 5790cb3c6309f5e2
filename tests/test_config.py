"""Tests for configuration loading."""

import pytest

from mmpay import ClientConfig, ConfigError, build_environment, create_payment_client, load_client_config

BASE = {
    "MMPAY_APP_ID": "app",
    "MMPAY_PUBLISHABLE_KEY": "pub",
    "MMPAY_SECRET_KEY": "secret",
    "MMPAY_API_BASE_URL": "https://api.mmpay.com/",
}


class TestClientConfig:
    def test_strips_trailing_slash(self) -> None:
        config = ClientConfig("app", "pub", "secret", "https://api.mmpay.com///")
        assert config.api_base_url == "https://api.mmpay.com"
        assert config.url_for("/payments/create") == "https://api.mmpay.com/payments/create"

    def test_bare_slash_base_url_is_rejected(self) -> None:
        with pytest.raises(ConfigError, match="api_base_url"):
            ClientConfig("app", "pub", "secret", "/")

    def test_default_timeout(self) -> None:
        assert ClientConfig("app", "pub", "secret", "https://x").timeout_seconds == 30.0

    @pytest.mark.parametrize("field", ["app_id", "publishable_key", "secret_key", "api_base_url"])
    def test_empty_required_field_is_rejected(self, field: str) -> None:
        values = {
            "app_id": "app",
            "publishable_key": "pub",
            "secret_key": "secret",
            "api_base_url": "https://x",
        }
        values[field] = ""
        with pytest.raises(ConfigError, match=field):
            ClientConfig(**values)

    def test_repr_hides_keys(self) -> None:
        text = repr(ClientConfig("app", "pub_key_value", "secret_value", "https://x"))
        assert "secret_value" not in text
        assert "pub_key_value" not in text

    def test_is_immutable(self) -> None:
        config = ClientConfig("app", "pub", "secret", "https://x")
        with pytest.raises(AttributeError):
            config.app_id = "other"  # type: ignore[misc]


class TestLoadClientConfig:
    def test_from_base_mapping(self) -> None:
        config = load_client_config(env_file=None, base=BASE)
        assert config.app_id == "app"
        assert config.publishable_key == "pub"
        assert config.secret_key == "secret"
        assert config.api_base_url == "https://api.mmpay.com"

    def test_missing_variable(self) -> None:
        base = dict(BASE)
        del base["MMPAY_SECRET_KEY"]
        with pytest.raises(ConfigError, match="MMPAY_SECRET_KEY"):
            load_client_config(env_file=None, base=base)

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ConfigError, match="MMPAY_TIMEOUT_SECONDS"):
            load_client_config(env_file=None, base={**BASE, "MMPAY_TIMEOUT_SECONDS": "soon"})

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ConfigError):
            load_client_config(env_file=None, base={**BASE, "MMPAY_TIMEOUT_SECONDS": "0"})

    def test_env_file_fills_gaps_without_overriding(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# credentials\n"
            "MMPAY_APP_ID=from_file\n"
            "export MMPAY_SECRET_KEY='file_secret'\n"
            "MMPAY_TIMEOUT_SECONDS=12.5\n",
            encoding="utf-8",
        )
        base = {k: v for k, v in BASE.items() if k != "MMPAY_SECRET_KEY"}

        config = load_client_config(env_file=str(env_file), base=base)

        assert config.app_id == "app"
        assert config.secret_key == "file_secret"
        assert config.timeout_seconds == 12.5

    def test_overrides_and_keywords_win(self) -> None:
        config = load_client_config(
            env_file=None,
            base=BASE,
            overrides={"MMPAY_APP_ID": "override"},
            publishable_key="kw_pub",
            timeout_seconds=5,
        )
        assert config.app_id == "override"
        assert config.publishable_key == "kw_pub"
        assert config.timeout_seconds == 5.0

    def test_missing_env_file_is_ignored(self, tmp_path) -> None:
        config = load_client_config(env_file=str(tmp_path / "absent.env"), base=BASE)
        assert config.app_id == "app"


def test_build_environment_layers_sources(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("A=file\nB=file\n", encoding="utf-8")

    environment = build_environment(env_file=str(env_file), base={"A": "base"}, overrides={"B": "cli"})

    assert environment.get("A") == "base"
    assert environment.get("B") == "cli"
    assert environment.get("C", "default") == "default"


def test_create_payment_client_rejects_mixed_inputs() -> None:
    config = ClientConfig("app", "pub", "secret", "https://x")
    with pytest.raises(ValueError):
        create_payment_client(config=config, app_id="other")


def test_create_payment_client_from_keywords() -> None:
    client = create_payment_client(env_file=None, base=BASE, app_id="kw_app")
    assert client.config.app_id == "kw_app"
    client.close()
