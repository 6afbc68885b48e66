"""
Application configuration using Pydantic settings.

This module contains the configuration settings for the compliance reporting
service, loaded from environment variables with sensible defaults.
"""

import os
from typing import Optional

from pydantic import Field, field_validator, ValidationInfo, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden with environment variables.
    """

    PROJECT_NAME: str = "Land Application Compliance"
    DEBUG: bool = False

    # Database Configuration
    # A POSTGRES_DB ending in ".db" selects a local SQLite file instead
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "compliance_user"
    POSTGRES_PASSWORD: str = "compliance_password"
    POSTGRES_DB: str = "compliance.db"
    POSTGRES_PORT: int = 5432

    SQLALCHEMY_DATABASE_URI: Optional[str] = Field(None, validate_default=True)

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        """Assemble database connection string from individual components."""
        if isinstance(v, str) and v:
            return v

        # Render/Railway/Heroku style
        database_url = os.getenv('DATABASE_URL')
        if database_url:
            if database_url.startswith('postgres://'):
                database_url = database_url.replace('postgres://', 'postgresql+asyncpg://', 1)
            elif database_url.startswith('postgresql://'):
                database_url = database_url.replace('postgresql://', 'postgresql+asyncpg://', 1)
            return database_url

        values = info.data
        db_name = values.get('POSTGRES_DB')

        if db_name and db_name.endswith('.db'):
            return f"sqlite+aiosqlite:///{db_name}"

        return (
            f"postgresql+asyncpg://{values.get('POSTGRES_USER')}:"
            f"{values.get('POSTGRES_PASSWORD')}@"
            f"{values.get('POSTGRES_SERVER')}:"
            f"{values.get('POSTGRES_PORT')}/"
            f"{db_name}"
        )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


# Create global settings instance
settings = Settings()
