"""Settings for the `atelier` backend."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import StoragesIDs


class Settings(BaseSettings):
    """Settings for the project."""

    model_config = SettingsConfigDict(
        env_prefix="ATELIER__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    DO_USE_FILE_LOGS: bool = True
    LOGS_PATH: str = "logs"  # Relative to the current working directory
    LOGS_RETENTION: str = "30 days"
    # The standard `logging` loggers forwarded to `loguru`
    INTERCEPTED_LOGGERS: list[str] = ["tortoise", "tortoise.db_client", "aiosqlite", "asyncpg"]

    # Database. Any URL Tortoise ORM understands (`postgres://`, `sqlite://`, ...)
    DATABASE_URL: str | None = None
    # if the `DATABASE_URL` is not set, then use the following credentials:
    POSTGRES_HOST: str | None = None
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_PORT: int | None = 5432
    POSTGRES_DB: str | None = None

    # Files storage
    FILE_STORAGE_SERVICE: StoragesIDs = StoragesIDs.LOCAL

    # Used verbatim as the prefix of every stored file URL
    FILES_BASE_URL: str = "http://localhost:8080"
    # Relative file paths are resolved against this directory. Defaults to the working directory at startup
    FILES_STORAGE_ROOT: str | None = None

    UPLOADS_DIR: str = "uploads"
    RANDOM_FILENAME_LENGTH: int = 16

    @field_validator("RANDOM_FILENAME_LENGTH")
    @classmethod
    def _validate_random_filename_length(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"RANDOM_FILENAME_LENGTH should be non-negative, got {value}")
        return value

    @property
    def database_url(self) -> str:
        """Return the `DATABASE_URL` or assemble one from the Postgres credentials."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if not (self.POSTGRES_HOST and self.POSTGRES_DB):
            raise ValueError("Either `DATABASE_URL` or `POSTGRES_HOST` and `POSTGRES_DB` should be set.")

        credentials = self.POSTGRES_USER or ""
        if self.POSTGRES_PASSWORD:
            credentials += f":{self.POSTGRES_PASSWORD}"
        if credentials:
            credentials += "@"

        return f"postgres://{credentials}{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"


settings = Settings()
