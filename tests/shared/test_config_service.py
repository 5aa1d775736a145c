# tests/shared/test_config_service.py
from carimport.config.config_service import ConfigService


def test_yaml_defaults_are_loaded():
    cfg = ConfigService()
    assert cfg.get("server.port", cast=int) == 3000
    assert cfg.get("parser.marketplace_domain") == "mobile.de"
    assert cfg.get("batch.delay_sec", cast=float) == 1.0
    assert cfg.get("parser.title_fallback_enabled", cast=bool) is True


def test_singleton_until_reset():
    first = ConfigService()
    assert ConfigService() is first
    ConfigService.reset()
    assert ConfigService() is not first


def test_environment_overrides_yaml(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("PLAYWRIGHT_HEADLESS", "false")
    monkeypatch.setenv("PROVIDER_KIND", "http")
    ConfigService.reset()

    cfg = ConfigService()

    assert cfg.get("server.port", cast=int) == 8080
    assert cfg.get("playwright.headless", cast=bool) is False      # рядок "false" не стає True
    assert cfg.get("provider.kind") == "http"


def test_missing_key_and_bad_cast_fall_back_to_default():
    cfg = ConfigService()
    assert cfg.get("nope.missing", "fallback") == "fallback"
    assert cfg.get("parser.marketplace_domain", 7, cast=int) == 7
