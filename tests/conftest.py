"""
Shared pytest fixtures: a throwaway SQLite database per test and a fixed clock.
"""
from datetime import datetime, timezone

import pytest

from sat_tracker.config import Settings
from sat_tracker.db import Database
from sat_tracker.importer import CsvImporter
from sat_tracker.services.storage import StorageService

# Wednesday, ISO week 25 of 2025
FIXED_NOW = datetime(2025, 6, 18, 12, 0, 0, tzinfo=timezone.utc)

@pytest.fixture
def now():
    return FIXED_NOW

@pytest.fixture
def database(tmp_path):
    database = Database()
    database.init(f"sqlite:///{tmp_path / 'test.db'}")
    yield database
    database.dispose()

@pytest.fixture
def session(database):
    session = database.get_session()
    yield session
    session.close()

@pytest.fixture
def store(session):
    return StorageService(session)

@pytest.fixture
def importer(store):
    return CsvImporter(store, Settings())
