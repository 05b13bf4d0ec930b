"""
SQLite repository for client profiles.

All SQL for profiles is encapsulated here - no SQL in service or API layers.
It should be injected via core.dependencies.get_profile_repository().
"""
import logging
from typing import Optional

from repositories.base import Database, ProfileRepository
from models import Profile
from core.datetime_utils import utc_now, to_db_string
from core.exceptions import ProfileNotFoundError

logger = logging.getLogger(__name__)

_PROFILE_COLUMNS = "id, client_id, height, weight, age, gender, created_at, updated_at"


class SqliteProfileRepository(ProfileRepository):
    """Profile CRUD backed by the ``profiles`` table."""

    def __init__(self, db: Database):
        """
        Args:
            db: Database instance for data access.
        """
        self._db = db

    def get_by_client_id(self, client_id: str) -> Optional[Profile]:
        with self._db.transaction("get_profile") as cursor:
            cursor.execute(
                f"SELECT {_PROFILE_COLUMNS} FROM profiles WHERE client_id = ?",
                (client_id,)
            )
            row = cursor.fetchone()

        return Profile.from_row(row) if row else None

    def add(self, profile: Profile) -> Profile:
        """
        Insert a profile and return the stored row.

        Insert and read-back share one transaction so the returned
        timestamps are the ones that were written.
        """
        now = to_db_string(utc_now())

        with self._db.transaction("add_profile") as cursor:
            cursor.execute("""
                INSERT INTO profiles (client_id, height, weight, age, gender, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                profile.client_id,
                profile.height,
                profile.weight,
                profile.age,
                profile.gender.value,
                now,
                now,
            ))
            cursor.execute(
                f"SELECT {_PROFILE_COLUMNS} FROM profiles WHERE id = ?",
                (cursor.lastrowid,)
            )
            row = cursor.fetchone()

        logger.info("Profile created", extra={"profile_id": row[0]})
        return Profile.from_row(row)

    def update(self, profile: Profile) -> Profile:
        with self._db.transaction("update_profile") as cursor:
            cursor.execute("""
                UPDATE profiles
                SET height = ?, weight = ?, age = ?, gender = ?, updated_at = ?
                WHERE client_id = ?
            """, (
                profile.height,
                profile.weight,
                profile.age,
                profile.gender.value,
                to_db_string(utc_now()),
                profile.client_id,
            ))
            cursor.execute(
                f"SELECT {_PROFILE_COLUMNS} FROM profiles WHERE client_id = ?",
                (profile.client_id,)
            )
            row = cursor.fetchone()

        if row is None:
            raise ProfileNotFoundError(client_id=profile.client_id)
        return Profile.from_row(row)
