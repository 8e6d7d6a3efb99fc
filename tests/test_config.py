from __future__ import annotations

import pytest

import bvl_portfolio.config as config_module
from bvl_portfolio.config import DEFAULT_FEED_URL, Settings
from bvl_portfolio.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)


def test_from_env_reads_required_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://app@db.local/portfolio")
    monkeypatch.setenv("DATABASE_KEY", "secret")
    monkeypatch.delenv("BVL_FEED_URL", raising=False)
    monkeypatch.delenv("REFERENCE_UTC_OFFSET_MINUTES", raising=False)

    settings = Settings.from_env()

    assert settings.datastore_url == "postgresql://app@db.local/portfolio"
    assert settings.datastore_key == "secret"
    assert settings.feed_base_url == DEFAULT_FEED_URL
    assert settings.reference_utc_offset_minutes == -300


def test_from_env_fails_fast_without_datastore_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://app@db.local/portfolio")
    monkeypatch.delenv("DATABASE_KEY", raising=False)

    with pytest.raises(ConfigError, match="datastore_key"):
        Settings.from_env()


def test_from_env_rejects_non_integer_offset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://app@db.local/portfolio")
    monkeypatch.setenv("DATABASE_KEY", "secret")
    monkeypatch.setenv("REFERENCE_UTC_OFFSET_MINUTES", "-5h")

    with pytest.raises(ConfigError, match="not an integer"):
        Settings.from_env()


def test_settings_rejects_blank_feed_url() -> None:
    with pytest.raises(ConfigError, match="feed_base_url"):
        Settings(datastore_url="sqlite://", datastore_key="k", feed_base_url="  ")
