# sat_tracker/db_config.py
"""Database location and connection string management"""
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from sat_tracker.config import settings

@dataclass
class DatabaseLocation:
    """SQLite database location container with validation"""
    path: str

    def to_connection_string(self) -> str:
        """Generate SQLAlchemy connection string for the database file"""
        return f"sqlite:///{Path(self.path).expanduser()}"

    @classmethod
    def from_config(cls) -> 'DatabaseLocation':
        """Create location from configured DB_PATH"""
        return cls(path=settings.DB_PATH)

    @classmethod
    def validate_url(cls, url: str) -> bool:
        """Validate that a database URL points at SQLite"""
        try:
            parsed = urlparse(url)
            return parsed.scheme in ('sqlite', 'sqlite+pysqlite')
        except ValueError:
            return False

class DatabaseManager:
    """Resolves database connections from settings"""

    @classmethod
    def initialize_from_env(cls) -> str:
        """
        Resolve the database connection string from environment settings

        Returns:
            Complete database connection string

        Raises:
            ValueError: If DATABASE_URL is set but is not a SQLite URL
        """
        if settings.DATABASE_URL:
            if not DatabaseLocation.validate_url(settings.DATABASE_URL):
                raise ValueError(f"Unsupported DATABASE_URL: {settings.DATABASE_URL}")
            return settings.DATABASE_URL

        return DatabaseLocation.from_config().to_connection_string()
