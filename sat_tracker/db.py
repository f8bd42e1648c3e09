# sat_tracker/db.py
"""SQLite engine and session management for the transaction store"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from sat_tracker.models.db import Base
from sat_tracker.db_config import DatabaseManager

logger = logging.getLogger(__name__)

def _enable_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()

class Database:
    """Owns the engine and hands out sessions bound to it"""

    def __init__(self):
        self._engine = None
        self._SessionLocal = None

    @staticmethod
    def _ensure_parent_dir(connection_string: str) -> None:
        """SQLite creates the file but not its directory"""
        database = make_url(connection_string).database
        if database and database != ':memory:':
            Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)

    def init(self, connection_string: Optional[str] = None) -> None:
        """
        Open the database and create missing tables.

        Args:
            connection_string: SQLAlchemy URL; resolved from settings when omitted

        Raises:
            ValueError: If the configured URL is not a SQLite URL
            SQLAlchemyError: If the database cannot be opened
        """
        if connection_string is None:
            try:
                connection_string = DatabaseManager.initialize_from_env()
            except ValueError as e:
                logger.error(f"Failed to resolve database location: {e}")
                raise

        try:
            self._ensure_parent_dir(connection_string)
            self._engine = create_engine(connection_string)
            event.listen(self._engine, 'connect', _enable_sqlite_pragmas)
            Base.metadata.create_all(self._engine)
            self._SessionLocal = sessionmaker(bind=self._engine)
            logger.info(f"Database ready at {self._engine.url.database}")

        except SQLAlchemyError as e:
            logger.error(f"Database initialization failed: {e}")
            raise

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Session scope for scripts; commits on success, rolls back on error.

        Usage:
            with db.session() as session:
                StorageService(session).list_transactions()
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get_session(self) -> Session:
        """
        New session; the caller closes it.

        Raises:
            RuntimeError: If init() has not been called
        """
        if not self._SessionLocal:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._SessionLocal()

    def dispose(self) -> None:
        """Release pooled connections; init() must be called again before reuse"""
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._SessionLocal = None

# Global database instance
db = Database()
