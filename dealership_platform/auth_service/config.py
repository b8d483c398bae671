"""
Configuration management for the Auth Service
"""
from ..common.config import ServiceSettings


class Settings(ServiceSettings):
    """Auth Service configuration loaded from environment variables"""

    SERVICE_NAME: str = "auth-service"
    PORT: int = 3001

    # Token signing
    JWT_SECRET: str = "change-this-secret-in-prod"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24


# Global settings instance
settings = Settings()
