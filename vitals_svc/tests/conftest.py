"""
Shared pytest fixtures for the Vitals Service tests.

Key patterns:

1. Storage Isolation: Each test gets a fresh temporary SQLite database
   (or a fresh in-memory store)
2. DI Override: Use app.dependency_overrides to inject test dependencies
3. Service Injection: Services are created with test repositories

Fixture Hierarchy:
    temp_db → repositories → services → test_app → client
"""
import os
import tempfile

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from repositories import (
    Database,
    SqliteProfileRepository,
    SqliteHealthMetricRepository,
    InMemoryStore,
    InMemoryProfileRepository,
    InMemoryHealthMetricRepository,
)
from services import ClientLockRegistry, ProfileService, MetricsService, ReferenceService
from core.reference_data import get_catalog
from core.exceptions import setup_exception_handlers
from core import dependencies as deps


@pytest.fixture
def temp_db():
    """
    Create a temporary database for testing.

    This fixture creates a fresh SQLite database in a temp file,
    ensuring complete isolation between tests.
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = Database(db_path=db_path)
    yield db

    for suffix in ("", "-wal", "-shm"):
        if os.path.exists(db_path + suffix):
            os.unlink(db_path + suffix)


@pytest.fixture
def memory_store():
    """Fresh in-memory backend."""
    return InMemoryStore()


@pytest.fixture
def profile_repo(temp_db):
    return SqliteProfileRepository(db=temp_db)


@pytest.fixture
def metric_repo(temp_db):
    return SqliteHealthMetricRepository(db=temp_db)


@pytest.fixture
def client_locks():
    return ClientLockRegistry()


@pytest.fixture
def profile_service(profile_repo, client_locks):
    return ProfileService(profile_repository=profile_repo, client_locks=client_locks)


@pytest.fixture
def metrics_service(profile_repo, metric_repo, client_locks):
    return MetricsService(
        profile_repository=profile_repo,
        health_metric_repository=metric_repo,
        client_locks=client_locks
    )


@pytest.fixture(params=["sqlite", "memory"])
def any_backend_services(request, temp_db, memory_store, client_locks):
    """
    (ProfileService, MetricsService) pair for each storage backend.

    Tests using this fixture run once per backend.
    """
    if request.param == "sqlite":
        profiles = SqliteProfileRepository(db=temp_db)
        metrics = SqliteHealthMetricRepository(db=temp_db)
    else:
        profiles = InMemoryProfileRepository(store=memory_store)
        metrics = InMemoryHealthMetricRepository(store=memory_store)

    return (
        ProfileService(profile_repository=profiles, client_locks=client_locks),
        MetricsService(
            profile_repository=profiles,
            health_metric_repository=metrics,
            client_locks=client_locks
        ),
    )


@pytest.fixture
def reference_service():
    return ReferenceService(catalog=get_catalog())


@pytest.fixture
def test_app(temp_db, profile_service, metrics_service, reference_service):
    """
    Create a FastAPI test app with dependency overrides.

    Uses the real routers and exception handlers, with the test database
    and services injected via dependency_overrides.
    """
    from api.routers import (
        health_router,
        profile_router,
        metrics_router,
        recommendations_router,
        reference_router,
    )

    app = FastAPI(title="Vitals Service API Test")

    setup_exception_handlers(app)

    app.dependency_overrides[deps.get_storage_backend] = lambda: temp_db
    app.dependency_overrides[deps.get_profile_service] = lambda: profile_service
    app.dependency_overrides[deps.get_metrics_service] = lambda: metrics_service
    app.dependency_overrides[deps.get_reference_service] = lambda: reference_service

    app.include_router(health_router)
    app.include_router(profile_router)
    app.include_router(metrics_router)
    app.include_router(recommendations_router)
    app.include_router(reference_router)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create a test client for the API."""
    return TestClient(test_app)
