import pytest

from boutique.core.config import Settings


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql://u:p@db/boutique", "postgresql+asyncpg://u:p@db/boutique"),
        ("postgres://u:p@db/boutique", "postgresql+asyncpg://u:p@db/boutique"),
        ("sqlite:///./boutique.db", "sqlite+aiosqlite:///./boutique.db"),
        ("postgresql+asyncpg://u:p@db/boutique", "postgresql+asyncpg://u:p@db/boutique"),
    ],
)
def test_database_url_uses_async_driver(url, expected):
    assert Settings(SECRET_KEY="k", DATABASE_URL=url).DATABASE_URL == expected


def test_origins_accept_json_string():
    settings = Settings(
        SECRET_KEY="k",
        DATABASE_URL="sqlite:///:memory:",
        ALLOWED_ORIGINS='["https://boutique.ma", "http://localhost:5173"]',
    )
    assert settings.ALLOWED_ORIGINS == ["https://boutique.ma", "http://localhost:5173"]
    assert settings.is_sqlite


def test_uniqueness_scope_is_restricted():
    with pytest.raises(ValueError):
        Settings(SECRET_KEY="k", DATABASE_URL="sqlite://", CLIENT_UNIQUENESS_SCOPE="pays")
