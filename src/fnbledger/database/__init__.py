"""Database layer for fnbledger."""

from fnbledger.database.base import Database
from fnbledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
