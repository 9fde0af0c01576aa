"""
Configuration management for the auth service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional, Union
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Auth service configuration loaded from environment variables"""

    # Runtime
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./app.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Token Configuration
    JWT_SECRET_ACCESS: Optional[str] = None
    JWT_SECRET_REFRESH: Optional[str] = None
    JWT_EXPIRES_IN_SHORT: Union[int, str] = "15m"
    JWT_EXPIRES_IN_LONG: Union[int, str] = "7d"
    JWT_ALGORITHM: str = "HS256"

    # Password hashing cost factor (pbkdf2_sha256 rounds)
    PASSWORD_HASH_ROUNDS: int = 29000

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"


def validate_runtime_config(config: Settings) -> None:
    """
    Check token secrets before the service starts accepting requests.

    Missing or identical access/refresh secrets are fatal in production
    and a warning everywhere else.

    Raises:
        RuntimeError: if the configuration is unusable in production
    """
    problems = []
    if not config.JWT_SECRET_ACCESS:
        problems.append("JWT_SECRET_ACCESS is not set")
    if not config.JWT_SECRET_REFRESH:
        problems.append("JWT_SECRET_REFRESH is not set")
    if (
        config.JWT_SECRET_ACCESS
        and config.JWT_SECRET_ACCESS == config.JWT_SECRET_REFRESH
    ):
        problems.append("JWT_SECRET_ACCESS and JWT_SECRET_REFRESH must differ")

    if not problems:
        return

    if config.is_production:
        raise RuntimeError("; ".join(problems))

    for problem in problems:
        logger.warning("Token configuration: %s", problem)


# Global settings instance
settings = Settings()
