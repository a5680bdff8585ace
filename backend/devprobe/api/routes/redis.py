from typing import Any

from fastapi import APIRouter, Depends

from devprobe.api.deps import verify_api_token
from devprobe.core.redis_probe import ping as redis_ping
from devprobe.schemas import RedisPingIn, RedisPingOut

router = APIRouter(
    prefix="/redis", tags=["redis"], dependencies=[Depends(verify_api_token)]
)


@router.post("/ping", response_model=RedisPingOut)
async def ping(body: RedisPingIn) -> Any:
    """PING a Redis server with optional credentials; returns its reply."""
    reply = await redis_ping(body.host, body.username, body.password)
    return RedisPingOut(reply=reply)
