"""
Repository layer for storage access.

Interfaces live in repositories.base; each backend provides a concrete
profile and health metric repository.
"""
from repositories.base import Database, ProfileRepository, HealthMetricRepository
from repositories.profile_repository import SqliteProfileRepository
from repositories.health_metric_repository import SqliteHealthMetricRepository
from repositories.memory import (
    InMemoryStore,
    InMemoryProfileRepository,
    InMemoryHealthMetricRepository,
)

__all__ = [
    "Database",
    "ProfileRepository",
    "HealthMetricRepository",
    "SqliteProfileRepository",
    "SqliteHealthMetricRepository",
    "InMemoryStore",
    "InMemoryProfileRepository",
    "InMemoryHealthMetricRepository",
]
