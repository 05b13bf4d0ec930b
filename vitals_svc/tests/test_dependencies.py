"""
Tests for configuration and the dependency wiring in core.dependencies.

The DI functions cache their storage in module globals, so every test
here resets them before and after running.
"""
import pytest

from core import dependencies as deps
from core.config import Settings, settings
from repositories import (
    Database,
    InMemoryStore,
    InMemoryProfileRepository,
    InMemoryHealthMetricRepository,
)


@pytest.fixture
def memory_backend(monkeypatch):
    """Point the DI layer at a fresh in-memory store."""
    monkeypatch.setattr(settings, "vitals_svc_storage_backend", "memory")
    deps.reset_storage()
    yield
    deps.reset_storage()


@pytest.fixture
def sqlite_backend(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "vitals_svc_storage_backend", "sqlite")
    monkeypatch.setattr(settings, "vitals_svc_db_dir", str(tmp_path))
    deps.reset_storage()
    yield
    deps.reset_storage()


class TestSettings:

    def test_backend_name_is_normalized(self):
        assert Settings(vitals_svc_storage_backend="MEMORY").vitals_svc_storage_backend == "memory"

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError, match="VITALS_SVC_STORAGE_BACKEND"):
            Settings(vitals_svc_storage_backend="postgres")

    def test_cors_origins_list(self):
        config = Settings(vitals_svc_cors_origins="http://a.test, ,http://b.test")
        assert config.cors_origins_list == ["http://a.test", "http://b.test"]


class TestStorageSelection:

    def test_memory_backend(self, memory_backend):
        store = deps.get_storage_backend()
        assert isinstance(store, InMemoryStore)
        assert deps.get_storage_backend() is store
        assert isinstance(deps.get_profile_repository(), InMemoryProfileRepository)
        assert isinstance(deps.get_health_metric_repository(), InMemoryHealthMetricRepository)

    def test_sqlite_backend(self, sqlite_backend, tmp_path):
        db = deps.get_storage_backend()
        assert isinstance(db, Database)
        assert db.db_path == str(tmp_path / settings.vitals_svc_db_file)

    def test_reset_drops_cached_store(self, memory_backend):
        first = deps.get_storage_backend()
        locks = deps.get_client_locks()

        deps.reset_storage()
        assert deps.get_storage_backend() is not first
        assert deps.get_client_locks() is not locks


class TestServiceWiring:

    def test_services_share_storage_and_locks(self, memory_backend):
        metrics = deps.get_metrics_service()
        profiles = deps.get_profile_service()

        metrics.update_steps("client-1", 1234)
        assert profiles.get_profile("client-1").client_id == "client-1"
        assert deps.get_metrics_service().get_today_metrics("client-1").steps == 1234
        assert deps.get_client_locks() is deps.get_client_locks()
