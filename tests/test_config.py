"""Tests for Settings."""

from app.config import Settings


def test_test_environment_uses_test_database():
    s = Settings()
    assert s.is_test
    assert s.database_url_obj.get_backend_name() == "sqlite"


def test_allowed_origins_include_frontend_url(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000")
    monkeypatch.setenv("FRONTEND_URL", "'https://encore.example.com'")
    assert Settings().allowed_origins == [
        "http://localhost:3000",
        "https://encore.example.com",
    ]


def test_allowed_origins_without_frontend_url(monkeypatch):
    monkeypatch.delenv("FRONTEND_URL", raising=False)
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    assert Settings().allowed_origins == ["http://a.test", "http://b.test"]
