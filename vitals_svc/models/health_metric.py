"""
Domain model for a client's current health metric record.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from core.datetime_utils import format_iso, from_db_string, utc_now

# Values a freshly created metric record starts with
DEFAULT_STEPS = 0
DEFAULT_HEART_RATE = 72
DEFAULT_SYSTOLIC_BP = 120
DEFAULT_DIASTOLIC_BP = 80


@dataclass
class HealthMetric:
    """
    The latest steps / heart-rate / blood-pressure reading for a client.

    The service keeps a single record per client and overwrites it in
    place; ``date`` is refreshed on every write.
    """

    steps: int = DEFAULT_STEPS
    heart_rate: int = DEFAULT_HEART_RATE
    systolic_bp: Optional[int] = DEFAULT_SYSTOLIC_BP
    diastolic_bp: Optional[int] = DEFAULT_DIASTOLIC_BP
    date: datetime = field(default_factory=utc_now)
    id: Optional[int] = None
    profile_id: Optional[int] = None

    @classmethod
    def from_row(cls, row: tuple) -> "HealthMetric":
        """
        Create a HealthMetric from a database row tuple.

        Args:
            row: Tuple of (id, profile_id, steps, heart_rate, systolic_bp,
                 diastolic_bp, date) from a database query.
        """
        return cls(
            id=row[0],
            profile_id=row[1],
            steps=row[2],
            heart_rate=row[3],
            systolic_bp=row[4],
            diastolic_bp=row[5],
            date=from_db_string(row[6]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the public camelCase metric shape."""
        return {
            "steps": self.steps,
            "heartRate": self.heart_rate,
            "systolicBP": self.systolic_bp,
            "diastolicBP": self.diastolic_bp,
            "date": format_iso(self.date),
        }
