from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

from ..validators.config_validators import to_lowercase, to_uppercase


class Settings(BaseSettings):
    """
    Service configuration, read from environment variables and an optional
    `.env` file. Every field has a default, so the app starts (and imports)
    with no configuration at all.
    """

    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Postgres connection parts
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "members"

    # Complete SQLAlchemy URL; replaces the POSTGRES_* parts when set.
    # e.g. sqlite+aiosqlite:///./members.db
    DATABASE_URL_OVERRIDE: str | None = None

    SQLALCHEMY_ECHO: bool = False
    # create the members table on startup (local runs without migrations)
    DB_CREATE_TABLES: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/member-registry")
    LOG_MAX_BYTES: int = 10_000_000
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """Accept `debug`, `Info`, ...; logging wants upper-case level names."""
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = ConfigDict(
        # .env next to the config/ package
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
    )


# One Settings per process; tests build their own instances instead.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
