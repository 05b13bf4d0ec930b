"""
FastAPI Dependency Injection configuration for the Vitals Service API.

This module provides the dependency injection (DI) infrastructure. It enables:
- Clean separation between API, Service, and Repository layers
- Swapping the storage backend through configuration
- Easy testing with fake dependencies via app.dependency_overrides

Architecture Flow:
    API Layer (Routers)
         ↓ Depends()
    Service Layer (Business Logic)
         ↓ Injected
    Repository Layer (Data Access)
         ↓ Injected
    Storage (SQLite Database or InMemoryStore)

Usage in Routers:
    from core.dependencies import get_metrics_service

    @router.post("/health-metrics/steps")
    def update_steps(
        body: StepsUpdate,
        metrics_service: MetricsService = Depends(get_metrics_service)
    ):
        return metrics_service.update_steps(...)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_metrics_service] = lambda: test_metrics_service
"""
import logging
from typing import Optional, Union

from core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# STORAGE DEPENDENCIES
# =============================================================================

# Lazy imports avoid circular dependencies with repositories and services
_database_instance: Optional["Database"] = None
_memory_store_instance: Optional["InMemoryStore"] = None
_client_locks_instance: Optional["ClientLockRegistry"] = None


def get_database() -> "Database":
    """
    Get the SQLite database instance (created once, then reused).

    Returns:
        Database: The configured database instance.
    """
    global _database_instance

    if _database_instance is None:
        from repositories.base import Database

        logger.info(f"Initializing database: {settings.database_path}")
        _database_instance = Database(
            db_path=settings.database_path,
            busy_timeout=settings.vitals_svc_db_busy_timeout
        )
        logger.info("Database initialized successfully")

    return _database_instance


def get_memory_store() -> "InMemoryStore":
    """Get the process-wide in-memory store used by the memory backend."""
    global _memory_store_instance

    if _memory_store_instance is None:
        from repositories.memory import InMemoryStore

        logger.info("Initializing in-memory store")
        _memory_store_instance = InMemoryStore()

    return _memory_store_instance


def get_storage_backend() -> Union["Database", "InMemoryStore"]:
    """
    Get the storage selected by VITALS_SVC_STORAGE_BACKEND.

    Both backends expose ping() for the readiness check.
    """
    if settings.vitals_svc_storage_backend == "memory":
        return get_memory_store()
    return get_database()


def reset_storage() -> None:
    """
    Drop the cached storage and lock registry (for testing only).

    This allows tests to inject a fresh backend.
    """
    global _database_instance, _memory_store_instance, _client_locks_instance
    _database_instance = None
    _memory_store_instance = None
    _client_locks_instance = None


# =============================================================================
# REPOSITORY DEPENDENCIES
# =============================================================================

def get_profile_repository() -> "ProfileRepository":
    """
    Get a ProfileRepository for the configured backend.

    Returns:
        ProfileRepository: Repository for profile reads and upserts.
    """
    from repositories import SqliteProfileRepository, InMemoryProfileRepository

    if settings.vitals_svc_storage_backend == "memory":
        return InMemoryProfileRepository(store=get_memory_store())
    return SqliteProfileRepository(db=get_database())


def get_health_metric_repository() -> "HealthMetricRepository":
    """
    Get a HealthMetricRepository for the configured backend.

    Returns:
        HealthMetricRepository: Repository for the current metric record.
    """
    from repositories import SqliteHealthMetricRepository, InMemoryHealthMetricRepository

    if settings.vitals_svc_storage_backend == "memory":
        return InMemoryHealthMetricRepository(store=get_memory_store())
    return SqliteHealthMetricRepository(db=get_database())


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_client_locks() -> "ClientLockRegistry":
    """
    Get the shared per-client lock registry.

    Services are built per request, so the registry must outlive them for
    the locks to serialize anything.
    """
    global _client_locks_instance

    if _client_locks_instance is None:
        from services.client_locks import ClientLockRegistry

        _client_locks_instance = ClientLockRegistry()

    return _client_locks_instance


def get_profile_service() -> "ProfileService":
    """
    Get a ProfileService instance with its repository injected.

    Returns:
        ProfileService: Service for profile, BMI and walking plan reads.
    """
    from services import ProfileService

    return ProfileService(
        profile_repository=get_profile_repository(),
        client_locks=get_client_locks()
    )


def get_metrics_service() -> "MetricsService":
    """
    Get a MetricsService instance with repositories and locks injected.

    Returns:
        MetricsService: Service for the steps/heart-rate/blood-pressure upserts.
    """
    from services import MetricsService

    return MetricsService(
        profile_repository=get_profile_repository(),
        health_metric_repository=get_health_metric_repository(),
        client_locks=get_client_locks()
    )


def get_reference_service() -> "ReferenceService":
    """
    Get a ReferenceService over the bundled catalog.

    ReferenceService is stateless; the catalog is parsed once and cached.
    """
    from core.reference_data import get_catalog
    from services import ReferenceService

    return ReferenceService(catalog=get_catalog())
