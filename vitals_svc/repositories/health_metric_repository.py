"""
SQLite repository for health metric records.

The service treats the newest row per profile as the client's current
reading; this repository only knows how to find, insert and overwrite rows.
All SQL is encapsulated here - no SQL in service or API layers.
"""
import logging
from typing import Optional

from repositories.base import Database, HealthMetricRepository
from models import HealthMetric
from core.datetime_utils import to_db_string
from core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

_METRIC_COLUMNS = "id, profile_id, steps, heart_rate, systolic_bp, diastolic_bp, date"


class SqliteHealthMetricRepository(HealthMetricRepository):
    """Health metric CRUD backed by the ``health_metrics`` table."""

    def __init__(self, db: Database):
        """
        Args:
            db: Database instance for data access.
        """
        self._db = db

    def get_latest(self, profile_id: int) -> Optional[HealthMetric]:
        with self._db.transaction("get_latest_metric") as cursor:
            cursor.execute(f"""
                SELECT {_METRIC_COLUMNS}
                FROM health_metrics
                WHERE profile_id = ?
                ORDER BY date DESC, id DESC
                LIMIT 1
            """, (profile_id,))
            row = cursor.fetchone()

        return HealthMetric.from_row(row) if row else None

    def add(self, metric: HealthMetric) -> HealthMetric:
        with self._db.transaction("add_metric") as cursor:
            cursor.execute("""
                INSERT INTO health_metrics
                (profile_id, steps, heart_rate, systolic_bp, diastolic_bp, date)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (
                metric.profile_id,
                metric.steps,
                metric.heart_rate,
                metric.systolic_bp,
                metric.diastolic_bp,
                to_db_string(metric.date),
            ))
            metric.id = cursor.lastrowid

        logger.debug("Metric record inserted", extra={"metric_id": metric.id})
        return metric

    def update(self, metric: HealthMetric) -> HealthMetric:
        with self._db.transaction("update_metric") as cursor:
            cursor.execute("""
                UPDATE health_metrics
                SET steps = ?, heart_rate = ?, systolic_bp = ?, diastolic_bp = ?, date = ?
                WHERE id = ?
            """, (
                metric.steps,
                metric.heart_rate,
                metric.systolic_bp,
                metric.diastolic_bp,
                to_db_string(metric.date),
                metric.id,
            ))
            updated = cursor.rowcount

        if updated == 0:
            raise NotFoundError(detail="Health metric record not found", metric_id=metric.id)
        return metric
