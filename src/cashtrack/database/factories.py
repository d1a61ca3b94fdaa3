"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from cashtrack.database.sqlalchemy_db import SQLAlchemyDatabase


def default_data_dir() -> Path:
    """Return ~/.cashtrack, creating it if needed."""
    data_dir = Path.home() / ".cashtrack"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks CASHTRACK_DB_PATH
            environment variable, then defaults to ~/.cashtrack/cashtrack.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("CASHTRACK_DB_PATH")

    if database_path is None:
        database_path = str(default_data_dir() / "cashtrack.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
