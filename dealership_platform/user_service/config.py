"""
Configuration management for the User Service
"""
from ..common.config import ServiceSettings


class Settings(ServiceSettings):
    """User Service configuration loaded from environment variables"""

    SERVICE_NAME: str = "user-service"
    PORT: int = 3002


# Global settings instance
settings = Settings()
