"""
Configuration management for the Vehicle Service
"""
from typing import Literal

from ..common.config import ServiceSettings


class Settings(ServiceSettings):
    """Vehicle Service configuration loaded from environment variables"""

    SERVICE_NAME: str = "vehicle-service"
    PORT: int = 3003

    # Auth Service Integration
    AUTH_SERVICE_URL: str = "http://auth-service:3001"
    AUTH_VERIFY_TIMEOUT_SECONDS: float = 5.0

    # Updates must carry the full vehicle unless this is enabled
    VEHICLE_PARTIAL_UPDATE: bool = False

    # "any": every authenticated caller may modify any vehicle
    # "owner_or_admin": only the creator or an admin may
    VEHICLE_MUTATION_POLICY: Literal["any", "owner_or_admin"] = "any"


# Global settings instance
settings = Settings()
