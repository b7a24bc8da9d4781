from postsearch.settings import Settings, to_async_database_url


def test_to_async_database_url_rewrites_driver():
    assert to_async_database_url("postgresql://u:p@h:5432/db") == "postgresql+asyncpg://u:p@h:5432/db"
    assert to_async_database_url("postgres://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert to_async_database_url("postgresql+asyncpg://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("SEARCH_CONFIG", raising=False)
    monkeypatch.delenv("FTS_CONFIG", raising=False)
    settings = Settings(_env_file=None)
    assert settings.search_config == "english"
    assert settings.page_size == 10


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/posts")
    monkeypatch.setenv("FTS_CONFIG", "simple")
    monkeypatch.setenv("CORS_ORIGINS", '["https://a.com", " http://localhost:3000"]')
    settings = Settings(_env_file=None)
    assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5432/posts"
    assert settings.search_config == "simple"
    assert settings.cors_origins == ["https://a.com", "http://localhost:3000"]
