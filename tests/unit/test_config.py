"""
Unit tests for abs_investigator.config module.

Settings are built directly (not through the lru_cached get_settings) so
each test controls its own environment.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from abs_investigator.config import Settings, get_settings


def test_defaults(monkeypatch, tmp_path):
    """Without environment overrides every credential is optional."""
    monkeypatch.chdir(tmp_path)
    for var in ("OPENFIGI_API_KEY", "FRED_API_KEY", "ADAPTER_TIMEOUT_SECONDS", "CACHE_DIR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("MAX_WORKERS", raising=False)
    monkeypatch.delenv("OFFLINE_JITTER", raising=False)

    settings = Settings()

    assert settings.openfigi_api_key is None
    assert settings.fred_api_key is None
    assert settings.adapter_timeout_seconds > 0
    assert settings.max_workers >= 1
    assert settings.cache_dir == Path("data/cache")
    assert settings.offline_jitter is True


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FRED_API_KEY", "  abc123  ")
    monkeypatch.setenv("ADAPTER_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("RANDOM_SEED", "42")
    monkeypatch.setenv("OFFLINE_JITTER", "false")

    settings = Settings()

    assert settings.fred_api_key == "abc123"
    assert settings.adapter_timeout_seconds == 2.5
    assert settings.random_seed == 42
    assert settings.offline_jitter is False


def test_empty_key_becomes_none(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENFIGI_API_KEY", "   ")

    assert Settings().openfigi_api_key is None


def test_user_agent_stripped(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SEC_USER_AGENT", "  research bot ops@example.com ")

    assert Settings().sec_user_agent == "research bot ops@example.com"


def test_invalid_timeout(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ADAPTER_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
