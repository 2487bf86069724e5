"""Application configuration"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (and .env if present)"""

    APP_NAME: str = "Restobill POS API"
    APP_VERSION: str = "0.1.0"

    # Database
    DATABASE_URL: str = "sqlite:///restobill.sqlite"  # file in project root
    DB_ECHO: bool = False
    SEED_SAMPLE_ITEMS: bool = True

    # Catalog / billing
    DEFAULT_CATEGORY: str = "Others"
    BILL_HISTORY_DEFAULT_LIMIT: int = 50

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v!r}")
        return level


settings = Settings()
