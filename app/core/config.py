"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Overload Tracker API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "overload"
    database_ssl_mode: str = "disable"

    database_pool_size: int = 5
    database_max_overflow: int = 10

    # CORS: comma-separated list of extra allowed origins outside development
    cors_origins: str = ""

    def _build_db_url(self, scheme: str, ssl_query: str | None = None) -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        url = (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}"
        )
        return f"{url}?{ssl_query}" if ssl_query else url

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return self._build_db_url("postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver). asyncpg takes ssl=require, not sslmode."""
        ssl_query = "ssl=require" if self.database_ssl_mode in ("require", "verify-full") else None
        return self._build_db_url("postgresql+asyncpg", ssl_query=ssl_query)

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
