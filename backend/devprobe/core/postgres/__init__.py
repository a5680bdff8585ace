"""
PostgreSQL connectivity probe and database administration.

No pool: every operation connects, runs one statement and lets go of the
connection.
"""

from .admin import create_database, rename_database, test_database_connection
from .connect import create_connection, open_connection

__all__ = [
    "open_connection",
    "create_connection",
    "test_database_connection",
    "create_database",
    "rename_database",
]
