import pytest

from problems_backend.config import (
    DEFAULT_DATABASE_URL,
    Settings,
    build_database_url,
    normalize_api_prefix,
    parse_allowed_origins,
)

DB_ENV = (
    "DATABASE_URL",
    "POSTGRES_URL",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_DB",
    "POSTGRES_PORT",
    "POSTGRES_HOST",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in DB_ENV + ("ALLOWED_ORIGINS", "API_PREFIX", "LOG_LEVEL", "HOST", "PORT"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_to_sqlite_file():
    assert build_database_url() == DEFAULT_DATABASE_URL


def test_database_url_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db:5432/algo")
    monkeypatch.setenv("POSTGRES_URL", "postgresql://x:y@other:5432/other")
    assert build_database_url() == "postgresql+psycopg2://u:p@db:5432/algo"


def test_postgres_url_with_credentials(monkeypatch):
    monkeypatch.setenv("POSTGRES_URL", "postgresql://u:p@localhost:5432/algo")
    assert build_database_url() == "postgresql+psycopg2://u:p@localhost:5432/algo"


def test_postgres_url_without_credentials_is_ignored(monkeypatch):
    monkeypatch.setenv("POSTGRES_URL", "postgresql://localhost:5432/algo")
    assert build_database_url() == DEFAULT_DATABASE_URL


def test_postgres_parts(monkeypatch):
    monkeypatch.setenv("POSTGRES_USER", "u")
    monkeypatch.setenv("POSTGRES_PASSWORD", "p")
    monkeypatch.setenv("POSTGRES_DB", "algo")
    monkeypatch.setenv("POSTGRES_PORT", "5001")
    assert build_database_url() == "postgresql+psycopg2://u:p@localhost:5001/algo"


def test_parse_allowed_origins():
    assert parse_allowed_origins(None) == ["http://localhost:5173"]
    assert parse_allowed_origins(" https://a.example , ,https://b.example ") == [
        "https://a.example",
        "https://b.example",
    ]


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://tracker.example")
    monkeypatch.setenv("API_PREFIX", "/v1/")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "9000")
    settings = Settings.from_env()
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.allowed_origins == ["https://tracker.example"]
    assert settings.api_prefix == "/v1"
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000


def test_normalize_api_prefix():
    assert normalize_api_prefix("api") == "/api"
    assert normalize_api_prefix("/api/") == "/api"
    assert normalize_api_prefix("v1/problems") == "/v1/problems"
    assert normalize_api_prefix("/") == ""
    assert normalize_api_prefix("") == ""
    assert normalize_api_prefix(None) == ""


def test_settings_prefix_without_leading_slash(monkeypatch):
    monkeypatch.setenv("API_PREFIX", "api")
    assert Settings.from_env().api_prefix == "/api"
