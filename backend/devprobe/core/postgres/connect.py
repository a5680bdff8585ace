"""
Per-call PostgreSQL connections.

open_connection() connects, then detaches a driver task that owns the rest of
the connection's life: it waits until the caller is done, notes a connection
the server dropped, and closes it. Its failures are logged, never returned;
by the time they happen the operation has already produced its result.

TLS is disabled (ssl=False) whatever the URL says. asyncpg runs statements
outside a transaction unless one is opened explicitly, which CREATE DATABASE
and ALTER DATABASE require.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from devprobe.core.errors import database_error_message

_log = logging.getLogger(__name__)

# Strong references so the loop does not drop pending driver tasks.
_driver_tasks: set[asyncio.Task[None]] = set()


def _log_notice(conn: asyncpg.Connection, message: asyncpg.PostgresLogMessage) -> None:
    _log.info("Server notice (%s): %s", message.severity, message.message)


async def create_connection(url: str) -> asyncpg.Connection:
    """Open an unencrypted connection to *url* (a postgresql:// URL)."""
    conn = await asyncpg.connect(url, ssl=False)
    conn.add_log_listener(_log_notice)
    return conn


async def drive_connection(conn: asyncpg.Connection, released: asyncio.Event) -> None:
    """Background half of a connection: close it once released, log what went wrong."""
    try:
        await released.wait()
    except asyncio.CancelledError:
        # loop shutting down; drop the socket without the goodbye round-trip
        conn.terminate()
        raise
    if conn.is_closed():
        _log.error("Connection Error: server closed the connection unexpectedly")
        return
    try:
        await conn.close()
    except Exception as e:
        _log.error("Connection Error: %s", database_error_message(e))


def spawn_driver(conn: asyncpg.Connection, released: asyncio.Event) -> asyncio.Task[None]:
    task = asyncio.create_task(drive_connection(conn, released))
    _driver_tasks.add(task)
    task.add_done_callback(_driver_tasks.discard)
    return task


@asynccontextmanager
async def open_connection(url: str) -> AsyncIterator[asyncpg.Connection]:
    """
    Connect to *url* and yield the connection for a single operation.

    The driver task is scheduled right after connecting and before anything
    runs on the connection. Leaving the block releases it; the connection is
    never reused.
    """
    conn = await create_connection(url)
    released = asyncio.Event()
    spawn_driver(conn, released)
    try:
        yield conn
    finally:
        released.set()
