"""Application configuration and environment settings"""
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # Storage settings
    DB_PATH: str = Field("sat_tracker.db", description="Path to the SQLite database file")
    DATABASE_URL: Optional[str] = Field(None, description="Full SQLAlchemy URL, overrides DB_PATH")

    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    # Import settings
    GROUPING_TOLERANCE_SECONDS: int = Field(5, description="Max gap between split-fill rows of one transaction")
    BITCOIN_ASSET: str = Field("BTC", description="Asset code kept from exchange exports")
    PREVIEW_SAMPLE_SIZE: int = Field(3, description="Number of raw rows returned by a CSV preview")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True
    )

settings = Settings()
