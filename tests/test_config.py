"""Tests for configuration loading."""

import pytest

from bookart.config import DEFAULT_SECRET_KEY, Config, get_config, reset_config


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in (
        "BOOKART_DATABASE_URL",
        "BOOKART_SECRET_KEY",
        "BOOKART_TOKEN_TTL",
        "BOOKART_LOG_LEVEL",
        "BOOKART_HOST",
        "BOOKART_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


class TestConfig:
    """Tests for Config.from_env."""

    def test_defaults(self):
        config = Config.from_env()

        assert config.database_url.endswith("bookart.db")
        assert config.secret_key == DEFAULT_SECRET_KEY
        assert config.token_ttl == 7 * 24 * 3600
        assert config.log_level == "INFO"
        assert config.port == 5000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BOOKART_SECRET_KEY", "s3cret")
        monkeypatch.setenv("BOOKART_TOKEN_TTL", "60")
        monkeypatch.setenv("BOOKART_LOG_LEVEL", "debug")
        monkeypatch.setenv("BOOKART_PORT", "8080")

        config = Config.from_env()
        assert config.secret_key == "s3cret"
        assert config.token_ttl == 60
        assert config.log_level == "DEBUG"
        assert config.port == 8080

    def test_validate_warns_about_default_secret(self):
        problems = Config.from_env().validate()
        assert any("BOOKART_SECRET_KEY" in p for p in problems)

    def test_validate_rejects_non_positive_ttl(self, monkeypatch):
        monkeypatch.setenv("BOOKART_SECRET_KEY", "s3cret")
        monkeypatch.setenv("BOOKART_TOKEN_TTL", "0")
        assert Config.from_env().validate() == ["BOOKART_TOKEN_TTL must be positive, got 0"]

    def test_get_config_is_cached(self):
        assert get_config() is get_config()
