import importlib
import sys


def _import_fresh_config(monkeypatch):
    monkeypatch.delitem(sys.modules, "byline_normalizer.config", raising=False)
    return importlib.import_module("byline_normalizer.config")


def test_get_config_reflects_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("BYLINE_TELEMETRY_ENABLED", "yes")
    monkeypatch.setenv("TELEMETRY_DATABASE_URL", "sqlite:///tmp.db")
    monkeypatch.setenv("TELEMETRY_ASYNC_WRITES", "0")

    config = _import_fresh_config(monkeypatch)

    assert config.APP_ENV == "staging"
    assert config.LOG_LEVEL == "DEBUG"
    assert config.BYLINE_TELEMETRY_ENABLED is True
    assert config.TELEMETRY_ASYNC_WRITES is False

    assert config.get_config() == {
        "app_env": "staging",
        "log_level": "DEBUG",
        "telemetry": {
            "enabled": True,
            "database_url": "sqlite:///tmp.db",
            "async_writes": False,
        },
    }


def test_defaults_when_environment_is_empty(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (
        "APP_ENV",
        "ENVIRONMENT",
        "LOG_LEVEL",
        "BYLINE_TELEMETRY_ENABLED",
        "TELEMETRY_DATABASE_URL",
        "TELEMETRY_ASYNC_WRITES",
    ):
        monkeypatch.delenv(name, raising=False)

    config = _import_fresh_config(monkeypatch)

    assert config.APP_ENV == "local"
    assert config.LOG_LEVEL == "INFO"
    assert config.BYLINE_TELEMETRY_ENABLED is False
    assert config.TELEMETRY_DATABASE_URL == "sqlite:///byline_telemetry.db"
    assert config.TELEMETRY_ASYNC_WRITES is True


def test_dotenv_file_does_not_override_real_environment(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text(
        "LOG_LEVEL=WARNING\nAPP_ENV=from-dotenv\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    # load_dotenv writes os.environ directly; register the keys so they are restored.
    monkeypatch.setenv("APP_ENV", "unset")
    monkeypatch.delenv("APP_ENV")
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    config = _import_fresh_config(monkeypatch)

    assert config.LOG_LEVEL == "ERROR"
    assert config.APP_ENV == "from-dotenv"
