"""Helpdesk Backend — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./helpdesk.db"

    # Security
    SECRET_KEY: str = "your-super-secret-key-minimum-32-characters-long-for-security"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "SupportSystem"
    JWT_AUDIENCE: str = "SupportSystemClients"
    JWT_EXPIRATION_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12

    # Bootstrap admin (created at startup only when a password is set)
    DEFAULT_ADMIN_NAME: str = "Administrator"
    DEFAULT_ADMIN_EMAIL: str = "admin@helpdesk.example.com"
    DEFAULT_ADMIN_PASSWORD: str = ""

    # Timezone
    TIMEZONE: str = "Europe/Moscow"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
