from fastapi import APIRouter

from devprobe.api.routes import databases, redis, scripts, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(scripts.router)
api_router.include_router(databases.router)
api_router.include_router(redis.router)
