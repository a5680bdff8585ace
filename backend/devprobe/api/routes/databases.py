"""
PostgreSQL probe and administration routes: test, create, rename.

Failures raise DatabaseOperationError, which the app turns into a 502 whose
body is the mapped ServiceResponse.
"""

from typing import Any

from fastapi import APIRouter, Depends

from devprobe.api.deps import verify_api_token
from devprobe.core import postgres
from devprobe.schemas import (
    DatabaseCreateIn,
    DatabaseRenameIn,
    DatabaseUrlIn,
    ServiceResponse,
)

router = APIRouter(
    prefix="/databases", tags=["databases"], dependencies=[Depends(verify_api_token)]
)


@router.post("/test", response_model=ServiceResponse)
async def test_connection(body: DatabaseUrlIn) -> Any:
    """Connect and run SELECT 1."""
    return await postgres.test_database_connection(body.url)


@router.post("/create", response_model=ServiceResponse)
async def create(body: DatabaseCreateIn) -> Any:
    return await postgres.create_database(body.url, body.database)


@router.post("/rename", response_model=ServiceResponse)
async def rename(body: DatabaseRenameIn) -> Any:
    return await postgres.rename_database(
        body.url, body.database, body.new_database_name
    )
