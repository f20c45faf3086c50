# fieldstock/config/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os


class Settings(BaseSettings):
    # App Info
    app_name: str = "FieldStock API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./fieldstock.db")
    create_tables_on_startup: bool = True
    sqlite_busy_timeout: int = 30

    # Operations are grouped by calendar day in this timezone
    business_timezone: str = "UTC"

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 10000))
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
