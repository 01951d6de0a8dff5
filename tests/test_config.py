"""Tests for CONTEXTIO_* settings loading and credential checks."""

from __future__ import annotations

from pathlib import Path

import pytest

from contextio.config import Settings, get_settings, validate_credentials

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clear_contextio_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own credentials out of the tests."""
    for name in (
        "PRODUCTION",
        "LOG_LEVEL",
        "CREDENTIALS_PATH",
        "CONTEXTIO_CONSUMER_KEY",
        "CONTEXTIO_CONSUMER_SECRET",
        "CONTEXTIO_TOKEN",
        "CONTEXTIO_TOKEN_SECRET",
        "CONTEXTIO_ACCOUNT_ID",
        "CONTEXTIO_BASE_URL",
        "CONTEXTIO_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Settings defaults
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    def test_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.production is False
        assert s.log_level == "INFO"
        assert s.contextio_base_url == "https://api.context.io/"
        assert s.contextio_timeout == 60.0
        assert s.contextio_consumer_key == ""
        assert s.contextio_consumer_secret.get_secret_value() == ""
        assert s.credentials_path == Path("contextio_credentials.json")

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRODUCTION", "true")
        monkeypatch.setenv("CONTEXTIO_TIMEOUT", "15")
        monkeypatch.setenv("CONTEXTIO_CONSUMER_SECRET", "cs-from-env")

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.production is True
        assert s.contextio_timeout == 15.0
        assert s.contextio_consumer_secret.get_secret_value() == "cs-from-env"

    def test_secret_not_in_repr(self) -> None:
        s = Settings(
            _env_file=None,  # type: ignore[call-arg]
            contextio_consumer_secret="hunter2",  # type: ignore[arg-type]
        )
        assert "hunter2" not in repr(s)


# ---------------------------------------------------------------------------
# Credential validation
# ---------------------------------------------------------------------------


class TestValidateCredentials:
    def test_production_missing_exits(self) -> None:
        settings = Settings(_env_file=None, production=True)  # type: ignore[call-arg]

        with pytest.raises(SystemExit) as exc_info:
            validate_credentials(settings)

        assert exc_info.value.code == 1

    def test_production_valid(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            production=True,
            contextio_consumer_key="ck",
            contextio_consumer_secret="cs",  # type: ignore[arg-type]
        )

        assert validate_credentials(settings) == []

    def test_dev_mode_returns_missing(self) -> None:
        settings = Settings(_env_file=None, contextio_consumer_key="ck")  # type: ignore[call-arg]

        missing = validate_credentials(settings)

        assert missing == ["CONTEXTIO_CONSUMER_SECRET is empty or not set"]

    def test_require_account(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            contextio_consumer_key="ck",
            contextio_consumer_secret="cs",  # type: ignore[arg-type]
            contextio_token="t",
        )

        missing = validate_credentials(settings, require_account=True)

        assert missing == [
            "CONTEXTIO_TOKEN_SECRET is empty or not set",
            "CONTEXTIO_ACCOUNT_ID is empty or not set",
        ]


# ---------------------------------------------------------------------------
# get_settings cache
# ---------------------------------------------------------------------------


class TestGetSettingsCached:
    def test_get_settings_cached(self) -> None:
        first = get_settings()
        second = get_settings()

        assert first is second
