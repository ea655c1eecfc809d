"""Tests for environment-driven settings and their use at startup."""

import logging

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

import database
from config import Settings, get_settings
from main import app


@pytest.fixture
def fresh_settings():
    root_level = logging.getLogger().level
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    logging.getLogger().setLevel(root_level)


def test_defaults(monkeypatch):
    for var in ("OUTAGE_DEFAULT_EXPIRY_SEC", "OUTAGE_DEAD_CHECK_INTERVAL_SEC",
                "OUTAGE_VERBOSE", "OUTAGE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings(_env_file=None)
    assert settings.default_expiry_sec == 450
    assert settings.dead_check_interval_sec == 30
    assert settings.verbose is False
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OUTAGE_DEFAULT_EXPIRY_SEC", "60")
    monkeypatch.setenv("OUTAGE_VERBOSE", "true")
    monkeypatch.setenv("OUTAGE_LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)
    assert settings.default_expiry_sec == 60
    assert settings.verbose is True
    assert settings.log_level == "DEBUG"


def test_invalid_values_are_rejected(monkeypatch):
    monkeypatch.setenv("OUTAGE_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

    monkeypatch.setenv("OUTAGE_LOG_LEVEL", "INFO")
    monkeypatch.setenv("OUTAGE_DEAD_CHECK_INTERVAL_SEC", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_startup_applies_settings_to_cache(monkeypatch, fresh_settings):
    monkeypatch.setenv("OUTAGE_DEFAULT_EXPIRY_SEC", "120")
    monkeypatch.setenv("OUTAGE_VERBOSE", "true")

    with TestClient(app) as client:
        response = client.get("/assets/config/default-expiry")
        assert response.json() == {"default_expiry_sec": 120}
        assert database.asset_cache.verbose is True
