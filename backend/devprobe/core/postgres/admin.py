"""
Short-lived PostgreSQL administrative operations.

Each call opens its own connection, runs exactly one statement and returns a
ServiceResponse; any failure is mapped and raised as DatabaseOperationError.
"""

import logging

from devprobe.core.errors import DatabaseOperationError, map_database_error
from devprobe.schemas import ServiceResponse

from .connect import open_connection

_log = logging.getLogger(__name__)

PING_STATEMENT = "SELECT 1"


def quote_identifier(name: str) -> str:
    """Quote *name* as a PostgreSQL identifier, doubling embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


async def _run_statement(url: str, statement: str, success_message: str) -> ServiceResponse:
    try:
        async with open_connection(url) as conn:
            await conn.execute(statement)
    except Exception as e:
        response = map_database_error(e)
        _log.warning("Database operation failed [%s]: %s", response.code, response.message)
        raise DatabaseOperationError(response) from e
    return ServiceResponse.success(success_message)


async def test_database_connection(url: str) -> ServiceResponse:
    """Connect and run SELECT 1."""
    return await _run_statement(url, PING_STATEMENT, "Success")


async def create_database(url: str, database: str) -> ServiceResponse:
    """CREATE DATABASE *database* using a connection to an existing database at *url*."""
    statement = f"CREATE DATABASE {quote_identifier(database)}"
    return await _run_statement(
        url, statement, f"Successfully created database '{database}'"
    )


async def rename_database(url: str, database: str, new_database_name: str) -> ServiceResponse:
    """ALTER DATABASE *database* RENAME TO *new_database_name*."""
    statement = (
        f"ALTER DATABASE {quote_identifier(database)} "
        f"RENAME TO {quote_identifier(new_database_name)}"
    )
    return await _run_statement(
        url, statement, f"Database {database} renamed to {new_database_name}"
    )
