from __future__ import annotations

import pytest

from dealdesk.core import config as config_module
from dealdesk.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clear_config_cache():
    config_module.get_config.cache_clear()
    yield
    config_module.get_config.cache_clear()


def test_defaults_build_a_valid_development_config(monkeypatch):
    for key in ("DATABASE_URL", "DASHBOARD_DEFAULT_PERIOD", "TOP_CLIENTS_LIMIT", "DB_CONNECTIVITY_REQUIRED"):
        monkeypatch.delenv(key, raising=False)

    cfg = config_module.get_config("development")

    assert cfg.ENV == "development"
    assert cfg.DATABASE_URL.startswith("sqlite")
    assert cfg.DASHBOARD_DEFAULT_PERIOD == "6months"
    assert cfg.TOP_CLIENTS_LIMIT == 5
    assert cfg.DB_CONNECTIVITY_REQUIRED is False
    assert cfg.is_production is False


def test_unsupported_database_scheme_is_rejected(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "mysql://user:pw@localhost/db")
    with pytest.raises(ConfigurationError):
        config_module.get_config("development")


def test_unknown_dashboard_period_is_rejected(monkeypatch):
    monkeypatch.setenv("DASHBOARD_DEFAULT_PERIOD", "2weeks")
    with pytest.raises(ConfigurationError):
        config_module.get_config("development")


def test_production_rejects_placeholder_jwt_secret(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://user:pw@db:5432/dealdesk")
    monkeypatch.setenv("JWT_SECRET", "change_me_jwt_secret")
    with pytest.raises(ConfigurationError):
        config_module.get_config("production")
