# app/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Catalog
    DEFAULT_UNIT: str = "pcs"

    # Dashboard
    TOP_SELLERS_LIMIT: int = 10
    REVENUE_TREND_DAYS: int = 7

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RESTOCK_RATE_LIMIT: str = "60/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
