"""
Configuration module for the Vitals Service API.
Uses Pydantic BaseSettings for validation - app fails fast if config is invalid.
"""
import logging
from pathlib import Path
from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Storage backends understood by core.dependencies.get_storage_backend()
STORAGE_BACKENDS = ("sqlite", "memory")


class Settings(BaseSettings):
    """
    Application settings with validation.
    Invalid values cause the app to fail fast at import time.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage Configuration
    vitals_svc_storage_backend: str = Field(default="sqlite", description="Storage backend: sqlite or memory")
    vitals_svc_db_dir: str = Field(default="data", description="Database directory")
    vitals_svc_db_file: str = Field(default="vitals.db", description="Database filename")
    vitals_svc_db_busy_timeout: int = Field(default=5000, description="SQLite busy timeout in milliseconds")

    # API Configuration
    vitals_svc_host: str = Field(default="0.0.0.0", description="API host")
    vitals_svc_port: int = Field(default=8000, description="API port")
    vitals_svc_reload: bool = Field(default=False, description="Enable hot reload")
    vitals_svc_cors_origins: str = Field(default="*", description="Allowed CORS origins (comma-separated)")

    # Client identification
    vitals_svc_session_cookie: str = Field(
        default="vitals_session",
        description="Cookie used to identify clients that have no routable address",
    )

    @model_validator(mode="after")
    def validate_storage(self) -> "Settings":
        """Reject unknown storage backends before the app starts."""
        backend = self.vitals_svc_storage_backend.lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"VITALS_SVC_STORAGE_BACKEND must be one of {STORAGE_BACKENDS}, got '{backend}'"
            )
        self.vitals_svc_storage_backend = backend

        if backend == "memory":
            logger.warning("Using in-memory storage - data is lost when the process exits")

        return self

    @property
    def database_path(self) -> str:
        """Get the full database path."""
        return str(Path(self.vitals_svc_db_dir) / self.vitals_svc_db_file)

    @property
    def cors_origins_list(self) -> List[str]:
        """Get the allowed CORS origins as a list."""
        return [o.strip() for o in self.vitals_svc_cors_origins.split(",") if o.strip()]


# Create global settings instance - fails fast if config is invalid
settings = Settings()

DATABASE_PATH = settings.database_path
DATABASE_BUSY_TIMEOUT = settings.vitals_svc_db_busy_timeout

API_HOST = settings.vitals_svc_host
API_PORT = settings.vitals_svc_port
API_RELOAD = settings.vitals_svc_reload

SESSION_COOKIE_NAME = settings.vitals_svc_session_cookie
