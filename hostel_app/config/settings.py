"""
Environment configuration for the hostel booking backend.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing_extensions import Annotated

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)

KNOWN_SERVICES = ("auth", "buildings", "bookings")


def _split_list(value: str) -> List[str]:
    """Parse a JSON list or a comma separated string."""
    if value.startswith('[') and value.endswith(']'):
        try:
            return [str(item) for item in json.loads(value)]
        except json.JSONDecodeError:
            pass
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Application configuration
    APP_NAME: str = Field(default="Hostel Management System", alias="PROJECT_NAME")
    API_VERSION: str = Field(default="1.0.0", alias="PROJECT_VERSION")
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:3000", "http://localhost:3001"],
        alias="BACKEND_CORS_ORIGINS",
    )
    ENABLED_SERVICES: Annotated[List[str], NoDecode] = Field(default=list(KNOWN_SERVICES))

    # Database configuration - support both individual fields and DATABASE_URL
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "hostel"
    DB_SSLMODE: str = "disable"
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    DB_ECHO: bool = False
    DB_CONNECT_ARGS: Dict[str, Any] = {}

    # Token configuration
    JWT_SECRET: str = Field(default="change-me")
    JWT_ALGORITHM: str = "HS256"
    # Go-style duration string ("24h", "90m", "1h30m"); bad values fall back to 24h
    JWT_EXPIRY: str = "24h"
    PASSWORD_BCRYPT_ROUNDS: int = 12

    # Peer services
    BUILDING_SERVICE_URL: str = "http://localhost:8002"
    INVENTORY_TIMEOUT_SECONDS: float = 10.0

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

    @field_validator('CORS_ORIGINS', 'ENABLED_SERVICES', mode='before')
    @classmethod
    def parse_list(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse list settings from a comma separated or JSON string"""
        if isinstance(v, str):
            return _split_list(v)
        return v

    @field_validator('ENABLED_SERVICES')
    @classmethod
    def validate_services(cls, v: List[str]) -> List[str]:
        unknown = [name for name in v if name not in KNOWN_SERVICES]
        if unknown:
            raise ValueError(f"Unknown services: {', '.join(unknown)}")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def get_database_url(self) -> str:
        """Construct database URL from components or use provided URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?sslmode={self.DB_SSLMODE}"
        )

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
