"""
Domain model for client profiles.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from core.datetime_utils import from_db_string


class Gender(str, Enum):
    """Genders accepted on a profile."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


# Values used when a client's profile is materialized for the first time
DEFAULT_HEIGHT_CM = 170.0
DEFAULT_WEIGHT_KG = 70.0
DEFAULT_AGE = 30
DEFAULT_GENDER = Gender.OTHER


@dataclass
class Profile:
    """One client's body measurements. Exactly one exists per client id."""

    client_id: str
    height: float
    weight: float
    age: int
    gender: Gender
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def default(cls, client_id: str) -> "Profile":
        """Build an unsaved profile carrying the default measurements."""
        return cls(
            client_id=client_id,
            height=DEFAULT_HEIGHT_CM,
            weight=DEFAULT_WEIGHT_KG,
            age=DEFAULT_AGE,
            gender=DEFAULT_GENDER,
        )

    @classmethod
    def from_row(cls, row: tuple) -> "Profile":
        """
        Create a Profile from a database row tuple.

        Args:
            row: Tuple of (id, client_id, height, weight, age, gender,
                 created_at, updated_at) from a database query.
        """
        return cls(
            id=row[0],
            client_id=row[1],
            height=float(row[2]),
            weight=float(row[3]),
            age=int(row[4]),
            gender=Gender(row[5]),
            created_at=from_db_string(row[6]),
            updated_at=from_db_string(row[7]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the public profile shape."""
        return {
            "height": self.height,
            "weight": self.weight,
            "age": self.age,
            "gender": self.gender.value,
        }
