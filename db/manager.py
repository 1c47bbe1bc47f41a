"""Database manager for SQLite connections, paths and schema migrations."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Set

from config import Config, get_migrations_dir
from logger import get_logger

logger = get_logger()


class DatabaseManager:
    """Manages database connections, paths and migrations.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        try:
            yield conn
        finally:
            conn.close()

    def get_db_path(self) -> Path:
        return self.config.db_path

    def get_migrations_dir(self) -> Path:
        return get_migrations_dir()

    def available_migrations(self) -> List[str]:
        """Get migration file names in the order they must be applied."""
        migrations_dir = self.get_migrations_dir()
        if not migrations_dir.exists():
            return []
        return sorted(path.name for path in migrations_dir.glob("*.sql"))

    def applied_migrations(self) -> Set[str]:
        with self.connect() as conn:
            _init_schema_migrations_table(conn)
            cursor = conn.execute("SELECT migration_file FROM schema_migrations")
            return {row[0] for row in cursor.fetchall()}

    def pending_migrations(self) -> List[str]:
        applied = self.applied_migrations()
        return [m for m in self.available_migrations() if m not in applied]

    def apply_migrations(self) -> List[str]:
        """Apply every pending migration in order.

        Returns:
            Names of the migrations applied.

        Raises:
            sqlite3.Error: If a migration fails. That migration is rolled back.
        """
        pending = self.pending_migrations()
        if not pending:
            return []

        with self.connect() as conn:
            for migration in pending:
                _apply_migration(conn, self.get_migrations_dir() / migration)

        return pending


def _init_schema_migrations_table(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()


def _apply_migration(conn: sqlite3.Connection, migration_path: Path) -> None:
    sql = migration_path.read_text(encoding="utf-8")

    try:
        conn.executescript(sql)
        conn.execute(
            "INSERT INTO schema_migrations (migration_file) VALUES (?)",
            (migration_path.name,),
        )
        conn.commit()
        logger.info(f"Applied migration: {migration_path.name}")
    except sqlite3.Error as e:
        conn.rollback()
        logger.error(f"Error applying migration {migration_path.name}: {e}")
        raise
