from __future__ import annotations

import pytest

from config import get_settings_module, load_settings


@pytest.mark.parametrize(
    "env, expected",
    [
        ("prod", "config.production"),
        ("Production", "config.production"),
        ("test", "config.testing"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_module(monkeypatch, env, expected):
    monkeypatch.delenv("APP_SETTINGS_MODULE", raising=False)
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_explicit_module_wins(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("APP_SETTINGS_MODULE", "config.testing")

    assert get_settings_module() == "config.testing"


def test_testing_settings_disable_geo_lookup(monkeypatch):
    monkeypatch.delenv("APP_SETTINGS_MODULE", raising=False)
    monkeypatch.setenv("APP_ENV", "testing")

    settings = load_settings()

    assert settings.TESTING is True
    assert settings.GEO_LOOKUP_URL is None
