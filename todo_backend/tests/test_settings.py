from src.api.settings import DEFAULT_DATABASE_URL, get_settings

ENV_VARS = [
    "DATABASE_URL",
    "DATABASE_SSL_REJECT_UNAUTHORIZED",
    "HOST",
    "PORT",
    "CORS_ALLOW_ORIGINS",
    "LOG_LEVEL",
]


def clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    clear_env(monkeypatch)
    s = get_settings()
    assert s.port == 4000
    assert s.host == "0.0.0.0"
    assert s.database_url == DEFAULT_DATABASE_URL
    assert s.database_ssl_reject_unauthorized is False
    assert s.cors_allow_origins == ["*"]
    assert s.log_level == "INFO"


def test_env_overrides(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/todos")
    monkeypatch.setenv("DATABASE_SSL_REJECT_UNAUTHORIZED", "yes")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = get_settings()
    assert s.port == 8080
    assert s.database_url == "postgresql://u:p@db/todos"
    assert s.database_ssl_reject_unauthorized is True
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.log_level == "DEBUG"


def test_invalid_port_falls_back(monkeypatch):
    clear_env(monkeypatch)
    for value in ("not-a-port", "0", "70000"):
        monkeypatch.setenv("PORT", value)
        assert get_settings().port == 4000


def test_empty_values_use_defaults(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("PORT", "")
    monkeypatch.setenv("DATABASE_URL", "")
    s = get_settings()
    assert s.port == 4000
    assert s.database_url == DEFAULT_DATABASE_URL
