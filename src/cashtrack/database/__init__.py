"""Database layer for cashtrack application."""

from cashtrack.database.base import Database
from cashtrack.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
