"""
Core module for application configuration, logging, and shared constants.

This module provides:
- Settings: Application configuration via pydantic-settings
- Dependency injection: FastAPI Depends() functions for services and repositories
- Exceptions: Domain-specific exception classes with HTTP status codes
- Datetime utilities: UTC-first datetime handling
"""
from core.config import settings, Settings

# Dependency injection - import functions for FastAPI Depends()
from core.dependencies import (
    get_database,
    get_memory_store,
    get_storage_backend,
    get_profile_repository,
    get_health_metric_repository,
    get_client_locks,
    get_profile_service,
    get_metrics_service,
    get_reference_service,
    reset_storage,
)

# Exception classes for consistent error handling
from core.exceptions import (
    VitalsServiceError,
    ValidationError,
    NotFoundError,
    ProfileNotFoundError,
    StorageError,
    StorageConnectionError,
    setup_exception_handlers,
)

# UTC datetime utilities
from core.datetime_utils import (
    utc_now,
    to_utc,
    parse_datetime,
    format_iso,
    to_db_string,
    from_db_string,
)
from core.config import (
    DATABASE_PATH,
    API_HOST,
    API_PORT,
    API_RELOAD,
    SESSION_COOKIE_NAME,
)

__all__ = [
    # Settings
    "settings",
    "Settings",
    # Dependency injection
    "get_database",
    "get_memory_store",
    "get_storage_backend",
    "get_profile_repository",
    "get_health_metric_repository",
    "get_client_locks",
    "get_profile_service",
    "get_metrics_service",
    "get_reference_service",
    "reset_storage",
    # Exceptions
    "VitalsServiceError",
    "ValidationError",
    "NotFoundError",
    "ProfileNotFoundError",
    "StorageError",
    "StorageConnectionError",
    "setup_exception_handlers",
    # Datetime utilities
    "utc_now",
    "to_utc",
    "parse_datetime",
    "format_iso",
    "to_db_string",
    "from_db_string",
    # Configuration constants
    "DATABASE_PATH",
    "API_HOST",
    "API_PORT",
    "API_RELOAD",
    "SESSION_COOKIE_NAME",
]
