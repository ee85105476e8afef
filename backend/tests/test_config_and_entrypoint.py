import pytest

from appli.config import Settings
from appli import __main__ as entrypoint
from appli.database import build_engine


def test_settings_defaults(monkeypatch):
    for var in ("ENV", "APPLI_HOST", "APPLI_PORT", "LOG_LEVEL", "ALLOW_DEV_CORS", "SQL_ECHO"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    s = Settings()
    assert s.ENV == "dev"
    assert s.HOST == "127.0.0.1"
    assert s.PORT == 8080
    assert s.DATABASE_URL == "sqlite://"
    assert s.LOG_LEVEL == "INFO"
    assert s.ALLOW_DEV_CORS is True
    assert s.SQL_ECHO is False


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("ENV", "PROD")
    monkeypatch.setenv("APPLI_PORT", "9090")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ALLOW_DEV_CORS", "false")
    s = Settings()
    assert s.ENV == "prod"
    assert s.PORT == 9090
    assert s.LOG_LEVEL == "DEBUG"
    assert s.ALLOW_DEV_CORS is False


@pytest.mark.parametrize(
    "var,value",
    [("APPLI_PORT", "abc"), ("APPLI_PORT", "0"), ("APPLI_PORT", "70000"), ("LOG_LEVEL", "LOUD"), ("DATABASE_URL", "")],
)
def test_settings_reject_invalid_values(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(RuntimeError):
        Settings()


def test_file_database_url(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'appli.db'}")
    with engine.connect() as conn:
        assert conn.exec_driver_sql("SELECT 1").scalar() == 1
    engine.dispose()
    assert (tmp_path / "appli.db").exists()


def test_entrypoint_passes_arguments_to_server(monkeypatch):
    captured = {}
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda target, **kw: captured.update(target=target, **kw))
    assert entrypoint.main(["--host", "0.0.0.0", "--port", "9000"]) == 0
    assert captured["target"] == "appli.main:app"
    assert captured["host"] == "0.0.0.0"
    assert captured["port"] == 9000
    assert captured["reload"] is False


def test_entrypoint_defaults_to_port_8080(monkeypatch):
    captured = {}
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda target, **kw: captured.update(kw))
    entrypoint.main([])
    assert captured["port"] == entrypoint.settings.PORT == 8080


@pytest.mark.parametrize("var", ["ALLOW_DEV_CORS", "SQL_ECHO"])
@pytest.mark.parametrize("value", ["yes", "1", "on", ""])
def test_settings_reject_non_boolean_flags(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(RuntimeError, match=var):
        Settings()


def test_settings_accept_flag_case_and_whitespace(monkeypatch):
    monkeypatch.setenv("SQL_ECHO", " TRUE ")
    assert Settings().SQL_ECHO is True
