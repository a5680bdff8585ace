"""
Pydantic schemas shared by the probes and the HTTP API.

ProcessOutput and ServiceResponse are the probe results; the *In models are
request bodies for the /scripts, /databases and /redis routes.
"""

from pydantic import BaseModel, ConfigDict, Field

SUCCESS_CODE = "00000"
UNKNOWN_CODE = "unknown"


# ---------------------------------------------------------------------------
# Probe results
# ---------------------------------------------------------------------------


class ProcessOutput(BaseModel):
    """Exit status and decoded output streams of one script run."""

    model_config = ConfigDict(frozen=True)

    status: int = Field(description="Exit code; -1 when terminated by a signal.")
    stdout: str
    stderr: str


class ServiceResponse(BaseModel):
    """Outcome of a database administrative operation."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="'00000' on success, SQLSTATE or 'unknown' on failure.")
    message: str

    @classmethod
    def success(cls, message: str) -> "ServiceResponse":
        return cls(code=SUCCESS_CODE, message=message)

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class ScriptRunIn(BaseModel):
    """Body for POST /scripts/run."""

    script: str = Field(..., min_length=1)


class DatabaseUrlIn(BaseModel):
    """Body for POST /databases/test."""

    url: str = Field(..., min_length=1, description="postgresql:// or postgres:// URL.")


class DatabaseCreateIn(DatabaseUrlIn):
    """Body for POST /databases/create."""

    database: str = Field(..., min_length=1, max_length=63)


class DatabaseRenameIn(DatabaseUrlIn):
    """Body for POST /databases/rename."""

    database: str = Field(..., min_length=1, max_length=63)
    new_database_name: str = Field(..., min_length=1, max_length=63)


class RedisPingIn(BaseModel):
    """Body for POST /redis/ping; username is only used together with password."""

    host: str = Field(..., min_length=1, max_length=255)
    username: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=512)


class RedisPingOut(BaseModel):
    reply: str
