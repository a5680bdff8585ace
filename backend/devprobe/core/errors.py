"""
Error taxonomy for the probes.

- ProbeError: generic failure carrying the raw system/driver text
  (spawn failures, Redis failures).
- DatabaseOperationError: structured failure carrying a ServiceResponse
  (SQLSTATE + message, or "unknown" + text).
- FileOperationError: file and env-file helper failures.

map_database_error() turns any exception raised by asyncpg (or anything else
that happened while talking to PostgreSQL) into a ServiceResponse.
"""

import asyncpg

from devprobe.schemas import UNKNOWN_CODE, ServiceResponse


class ProbeError(Exception):
    """A probe could not reach or drive its external service."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class DatabaseOperationError(ProbeError):
    """A database administrative operation failed; ``response`` holds the mapped error."""

    def __init__(self, response: ServiceResponse) -> None:
        super().__init__(response.model_dump_json())
        self.response = response

    @property
    def code(self) -> str:
        return self.response.code

    @property
    def message(self) -> str:
        return self.response.message


class FileOperationError(ProbeError):
    pass


def _structured_code(error: BaseException) -> str | None:
    if isinstance(error, asyncpg.PostgresError):
        # set from the server's C field, including during the startup handshake
        return error.sqlstate
    return None


def database_error_message(error: BaseException) -> str:
    """Primary server message of a structured error, else the error's string form."""
    if _structured_code(error) is not None:
        primary = error.message  # type: ignore[attr-defined]
        if primary:
            return primary
    return str(error)


def map_database_error(error: BaseException) -> ServiceResponse:
    """
    Map a backend failure to ServiceResponse.

    Errors carrying a SQLSTATE keep it verbatim together with the server's
    primary message, whether the server sent them while authenticating or
    while running a statement. Everything else (refused sockets, DNS,
    client-side driver errors) becomes code "unknown".
    """
    code = _structured_code(error)
    if code is None:
        return ServiceResponse(code=UNKNOWN_CODE, message=str(error))
    return ServiceResponse(code=code, message=database_error_message(error))
