# pos_api/core/config.py

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Security
    SECRET_KEY: str
    ALGORITHM: Literal["HS256"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Guards first-manager bootstrap; endpoint disabled when unset
    INTERNAL_ADMIN_SECRET: str | None = None

    # Database
    DATABASE_URL: str = "sqlite:///./pos.db"
    DB_LOCK_TIMEOUT_SECONDS: float = 5.0

    # Sale commit must finish (or roll back) within this window
    SALE_COMMIT_TIMEOUT_SECONDS: float = 10.0

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    SALES_RATE_LIMIT: str = "30/minute"
    LOGIN_RATE_LIMIT: str = "5/minute"



    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )

    @model_validator(mode="after")
    def lock_wait_within_sale_window(self):
        if self.DB_LOCK_TIMEOUT_SECONDS > self.SALE_COMMIT_TIMEOUT_SECONDS:
            raise ValueError(
                "DB_LOCK_TIMEOUT_SECONDS must not exceed SALE_COMMIT_TIMEOUT_SECONDS"
            )
        return self


settings = Settings()
