from config import get_settings_module, load_settings


def test_settings_module_selection(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"
    assert get_settings_module("prod") == "config.production"
    assert get_settings_module("TESTING") == "config.testing"

    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module() == "config.production"


def test_testing_settings_are_offline_and_strict():
    settings = load_settings("testing")

    assert settings.GEMINI_API_KEY == ""
    assert settings.QR_FALLBACK_TO_FIRST_SITE is False
    assert settings.AUTO_LOAD_MONTH is False
    assert settings.DISPLAY_TIMEZONE == "UTC"
