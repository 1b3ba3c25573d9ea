"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Fitness Tracker API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API (empty prefix serves routes at the root: /users, /workouts, ...)
    api_prefix: str = ""

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "fitness_tracker"
    database_ssl_mode: str = "disable"
    # Full async DSN; overrides the host/port/... fields when set (e.g. sqlite+aiosqlite:///./dev.db)
    database_dsn: str | None = None

    # Pool (ignored for SQLite)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Create tables on startup instead of running Alembic (dev / tests)
    create_tables_on_startup: bool = False

    # Auth
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=disable") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        if self.database_dsn:
            url = make_url(self.database_dsn)
            return url.set(drivername=url.get_backend_name()).render_as_string(hide_password=False)
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver)."""
        if self.database_dsn:
            return self.database_dsn
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={self.database_ssl_mode}")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
