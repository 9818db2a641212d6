import pytest

from foodtrucks.core import config


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "abc123")
    monkeypatch.setenv("FOODTRUCKS_DATA_PATH", "/data/permits.csv")
    monkeypatch.setenv("PORT", "9100")
    monkeypatch.setenv("FOODTRUCKS_LOOKUP_TIMEOUT", "2.5")
    monkeypatch.setenv("FOODTRUCKS_LOOKUP_WORKERS", "4")
    monkeypatch.setenv("FOODTRUCKS_STRICT_LOAD", "yes")

    settings = config.get_settings()

    assert settings.google_maps_api_key == "abc123"
    assert settings.data_path == "/data/permits.csv"
    assert settings.port == 9100
    assert settings.lookup_timeout == 2.5
    assert settings.lookup_workers == 4
    assert settings.strict_load is True


def test_get_settings_warns_when_missing(monkeypatch, caplog):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for name in (
        "GOOGLE_MAPS_API_KEY",
        "FOODTRUCKS_DATA_PATH",
        "FOODTRUCKS_HOST",
        "PORT",
        "FOODTRUCKS_LOOKUP_TIMEOUT",
        "FOODTRUCKS_LOOKUP_WORKERS",
        "FOODTRUCKS_STRICT_LOAD",
    ):
        monkeypatch.delenv(name, raising=False)

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "GOOGLE_MAPS_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.google_maps_api_key == ""
    assert settings.data_path == "Mobile_Food_Facility_Permit.csv"
    assert settings.host == "localhost"
    assert settings.port == 8080
    assert settings.lookup_workers == 1
    assert settings.strict_load is False


def test_require_api_key():
    assert config.require_api_key(config.Settings(google_maps_api_key="key")) == "key"
    with pytest.raises(config.ConfigError):
        config.require_api_key(config.Settings(google_maps_api_key=""))
