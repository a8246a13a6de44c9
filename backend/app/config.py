"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache), single instance per process
    - DATABASE_URL, when set, wins over the DB_* components

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Pool queue limit and wait timeout are settings, not constants: unbounded waiting is
      the default but can be capped per deployment
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "expenses"
    database_url_override: str | None = Field(
        None, validation_alias=AliasChoices("database_url", "database_url_override"),
    )

    db_pool_size: int = 10
    db_pool_queue_limit: int = 0
    db_pool_timeout: float | None = None

    @field_validator("database_url_override", mode="before")
    @classmethod
    def read_database_url(cls, v):
        """Blank DATABASE_URL means "not set"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    app_env: str = "development"

    # API
    cors_origins: list[str] = ["*"]
    cors_methods: list[str] = ["GET", "POST"]
    cors_headers: list[str] = ["Content-Type"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    @property
    def is_test(self) -> bool:
        return self.app_env.lower() == "test"


@lru_cache
def get_settings() -> Settings:
    return Settings()
