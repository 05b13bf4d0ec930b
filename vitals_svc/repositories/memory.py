"""
In-memory storage backend.

Selected with VITALS_SVC_STORAGE_BACKEND=memory and used by tests that do
not need SQLite. State lives on an explicit ``InMemoryStore`` instance that
is injected into both repositories; there is no module-level state.
Records are copied on the way in and out so callers never share mutable
objects with the store.
"""
import itertools
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional

from repositories.base import ProfileRepository, HealthMetricRepository
from models import Profile, HealthMetric
from core.datetime_utils import utc_now
from core.exceptions import NotFoundError, ProfileNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class InMemoryStore:
    """Tables for the in-memory backend, guarded by a single lock."""

    profiles: Dict[str, Profile] = field(default_factory=dict)
    metrics: Dict[int, List[HealthMetric]] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)
    _profile_ids: Iterator[int] = field(default_factory=lambda: itertools.count(1))
    _metric_ids: Iterator[int] = field(default_factory=lambda: itertools.count(1))

    def next_profile_id(self) -> int:
        return next(self._profile_ids)

    def next_metric_id(self) -> int:
        return next(self._metric_ids)

    def ping(self) -> None:
        """Always succeeds; present for parity with Database.ping()."""

    def clear(self) -> None:
        with self.lock:
            self.profiles.clear()
            self.metrics.clear()


class InMemoryProfileRepository(ProfileRepository):

    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_by_client_id(self, client_id: str) -> Optional[Profile]:
        with self._store.lock:
            profile = self._store.profiles.get(client_id)
            return replace(profile) if profile else None

    def add(self, profile: Profile) -> Profile:
        now = utc_now()
        with self._store.lock:
            stored = replace(
                profile,
                id=self._store.next_profile_id(),
                created_at=now,
                updated_at=now,
            )
            self._store.profiles[stored.client_id] = stored
            return replace(stored)

    def update(self, profile: Profile) -> Profile:
        with self._store.lock:
            existing = self._store.profiles.get(profile.client_id)
            if existing is None:
                raise ProfileNotFoundError(client_id=profile.client_id)
            stored = replace(
                existing,
                height=profile.height,
                weight=profile.weight,
                age=profile.age,
                gender=profile.gender,
                updated_at=utc_now(),
            )
            self._store.profiles[stored.client_id] = stored
            return replace(stored)


class InMemoryHealthMetricRepository(HealthMetricRepository):

    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_latest(self, profile_id: int) -> Optional[HealthMetric]:
        with self._store.lock:
            records = self._store.metrics.get(profile_id)
            if not records:
                return None
            latest = max(records, key=lambda m: (m.date, m.id))
            return replace(latest)

    def add(self, metric: HealthMetric) -> HealthMetric:
        with self._store.lock:
            stored = replace(metric, id=self._store.next_metric_id())
            self._store.metrics.setdefault(stored.profile_id, []).append(stored)
            return replace(stored)

    def update(self, metric: HealthMetric) -> HealthMetric:
        with self._store.lock:
            records = self._store.metrics.get(metric.profile_id, [])
            for index, existing in enumerate(records):
                if existing.id == metric.id:
                    records[index] = replace(metric)
                    return replace(metric)
        raise NotFoundError(detail="Health metric record not found", metric_id=metric.id)
