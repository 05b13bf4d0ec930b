"""
Storage interfaces and the SQLite database connection manager.

Two interchangeable storage backends implement the repository interfaces
defined here:

- SQLite (``Database`` + ``Sqlite*Repository``) for persistent deployments
- In-memory (``repositories.memory``) for tests and throwaway instances

IMPORTANT: Backends should be built through the DI layer.
Use core.dependencies.get_profile_repository() / get_health_metric_repository()
instead of instantiating directly; the backend is chosen by
VITALS_SVC_STORAGE_BACKEND.
"""
import sqlite3
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Tuple

from core.config import DATABASE_PATH, DATABASE_BUSY_TIMEOUT
from core.exceptions import StorageError, StorageConnectionError
from models import Profile, HealthMetric

logger = logging.getLogger(__name__)


# =============================================================================
# REPOSITORY INTERFACES
# =============================================================================

class ProfileRepository(ABC):
    """Data access for client profiles (one per client id)."""

    @abstractmethod
    def get_by_client_id(self, client_id: str) -> Optional[Profile]:
        """Return the client's profile, or None if it was never created."""

    @abstractmethod
    def add(self, profile: Profile) -> Profile:
        """Insert a new profile and return it with id and timestamps set."""

    @abstractmethod
    def update(self, profile: Profile) -> Profile:
        """Overwrite every field of an existing profile and refresh updated_at."""

    def get_or_create(self, client_id: str) -> Tuple[Profile, bool]:
        """
        Return the client's profile, inserting the default one if absent.

        Returns:
            Tuple of (profile, created) where ``created`` is True only when
            this call wrote the default profile.
        """
        profile = self.get_by_client_id(client_id)
        if profile is not None:
            return profile, False
        return self.add(Profile.default(client_id)), True


class HealthMetricRepository(ABC):
    """Data access for the per-client current health metric."""

    @abstractmethod
    def get_latest(self, profile_id: int) -> Optional[HealthMetric]:
        """Return the most recently written metric for the profile, if any."""

    @abstractmethod
    def add(self, metric: HealthMetric) -> HealthMetric:
        """Insert a metric record and return it with its id set."""

    @abstractmethod
    def update(self, metric: HealthMetric) -> HealthMetric:
        """Overwrite an existing metric record in place."""


# =============================================================================
# SQLITE DATABASE
# =============================================================================

class Database:
    """
    SQLite database connection manager with concurrency optimizations.

    Features:
    - WAL mode for better concurrent read/write performance
    - Busy timeout to handle lock contention gracefully
    - Foreign key constraints enabled by default

    Usage:
        # Via dependency injection (recommended):
        from core.dependencies import get_database
        db = get_database()

        # Direct instantiation (for testing):
        db = Database(db_path="/tmp/test.db")
    """

    def __init__(self, db_path: Optional[str] = None, busy_timeout: Optional[int] = None):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Defaults to config DATABASE_PATH.
            busy_timeout: SQLite busy timeout in milliseconds. Defaults to config value.
        """
        self.db_path = db_path or DATABASE_PATH
        self.busy_timeout = busy_timeout if busy_timeout is not None else DATABASE_BUSY_TIMEOUT

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._init_db()

    def _configure_connection(self, conn: sqlite3.Connection) -> None:
        """Apply busy timeout and foreign key enforcement to a connection."""
        conn.execute(f"PRAGMA busy_timeout = {self.busy_timeout}")
        conn.execute("PRAGMA foreign_keys = ON")

    def _init_db(self) -> None:
        """Create the schema if missing and enable WAL mode."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageConnectionError(operation="connect", db_path=self.db_path) from e

        try:
            self._configure_connection(conn)
            cursor = conn.cursor()

            # WAL mode persists in the database file
            cursor.execute("PRAGMA journal_mode = WAL")
            result = cursor.fetchone()
            if result and result[0].lower() == "wal":
                logger.info(f"SQLite WAL mode enabled for {self.db_path}")
            else:
                logger.warning(f"Failed to enable WAL mode, current mode: {result}")

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS profiles (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    client_id TEXT UNIQUE NOT NULL,
                    height REAL NOT NULL,
                    weight REAL NOT NULL,
                    age INTEGER NOT NULL,
                    gender TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS health_metrics (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    profile_id INTEGER NOT NULL,
                    steps INTEGER NOT NULL DEFAULT 0,
                    heart_rate INTEGER NOT NULL,
                    systolic_bp INTEGER,
                    diastolic_bp INTEGER,
                    date TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    FOREIGN KEY (profile_id) REFERENCES profiles(id)
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_health_metrics_profile_date
                ON health_metrics (profile_id, date DESC)
            """)

            conn.commit()
        finally:
            conn.close()

        logger.info(
            f"Database initialized: {self.db_path} "
            f"(busy_timeout={self.busy_timeout}ms)"
        )

    def get_connection(self) -> sqlite3.Connection:
        """Get a new database connection with concurrency settings applied."""
        conn = sqlite3.connect(self.db_path)
        self._configure_connection(conn)
        return conn

    @contextmanager
    def transaction(self, operation: str) -> Iterator[sqlite3.Cursor]:
        """
        Run statements in a single transaction.

        Commits on success, rolls back on failure, and converts any
        sqlite3.Error into StorageError tagged with ``operation``.
        """
        try:
            conn = self.get_connection()
        except sqlite3.Error as e:
            logger.error(f"Cannot open database for {operation}: {e}")
            raise StorageConnectionError(operation=operation) from e

        try:
            yield conn.cursor()
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error during {operation}: {e}. Transaction rolled back.")
            raise StorageError(operation=operation) from e
        finally:
            conn.close()

    def ping(self) -> None:
        """Run a trivial query; raises StorageError if the file is unusable."""
        with self.transaction("ping") as cursor:
            cursor.execute("SELECT 1")
