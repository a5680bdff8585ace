"""
Script runner route. A non-zero exit is a normal 200 response; only a failed
spawn is an error (ProbeError -> 502 via the app's exception handler).
"""

from typing import Any

from fastapi import APIRouter, Depends

from devprobe.api.deps import verify_api_token
from devprobe.core.process import run_script
from devprobe.schemas import ProcessOutput, ScriptRunIn

router = APIRouter(
    prefix="/scripts", tags=["scripts"], dependencies=[Depends(verify_api_token)]
)


@router.post("/run", response_model=ProcessOutput)
async def run(body: ScriptRunIn) -> Any:
    """Run a shell script with the npm global bin directory on PATH."""
    return await run_script(body.script)
