"""
Settings shared by every service, loaded from environment variables or .env
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class ServiceSettings(BaseSettings):
    """Base configuration; each service subclasses it with its own defaults"""

    # Server Configuration
    SERVICE_NAME: str = "service"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./dealership.db"
    DB_ECHO: bool = False

    # Pagination
    MAX_PAGE_LIMIT: int = 100

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )
