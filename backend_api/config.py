"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from sqlalchemy.engine import URL


# config.py is in backend_api/, the project root is one level up
_CONFIG_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _CONFIG_DIR.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Commercial Microservice API", description="API title")
    app_description: str = Field(default="Financial Data API", description="API description")
    app_version: str = Field(default="1.0", description="API version")
    app_env: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Root logging level")

    # HTTP server
    host: str = Field(default="0.0.0.0", description="Interface the server binds to")
    port: int = Field(default=3001, description="Port the server listens on")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["*"],
        description="Origins allowed to call the API (comma-separated in env)",
    )

    # Database
    database_host: str = Field(default="localhost", description="PostgreSQL host")
    database_port: int = Field(default=5432, description="PostgreSQL port")
    database_user: str = Field(default="postgres", description="PostgreSQL user")
    database_password: str = Field(..., description="PostgreSQL password")
    database_name: str = Field(default="app_db", description="PostgreSQL database name")
    database_synchronize: bool = Field(
        default=False,
        description="If True, create missing tables from the models at startup. Never in production.",
    )

    @field_validator("database_password", mode="before")
    @classmethod
    def validate_database_password(cls, v: str | None) -> str:
        """Reject an empty database password."""
        if v is None or v == "":
            raise ValueError("DATABASE_PASSWORD is required")
        return v

    @field_validator("app_env", mode="before")
    @classmethod
    def normalize_app_env(cls, v: str) -> str:
        """Normalize app environment to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Accept a comma-separated string of origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Refuse schema synchronization in production."""
        if self.is_production and self.database_synchronize:
            raise ValueError("DATABASE_SYNCHRONIZE must be disabled in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def database_url(self) -> URL:
        """PostgreSQL connection URL built from the database settings."""
        return URL.create(
            "postgresql+psycopg2",
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        )


def get_settings() -> Settings:
    """Build application settings from the environment.

    Returns:
        Settings: Application settings instance

    Example:
        ```python
        from backend_api.config import get_settings

        settings = get_settings()
        print(settings.database_name)
        ```
    """
    return Settings()
