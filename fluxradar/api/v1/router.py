"""
API Router Configuration
"""

from fastapi import APIRouter
from fluxradar.api.v1.routes import (
    data,
    resources,
    updates,
)

api_router = APIRouter()

api_router.include_router(
    data.router,
    tags=["数据接收"]
)
api_router.include_router(
    resources.router,
    tags=["资源查询"]
)
api_router.include_router(
    updates.router,
    tags=["实时推送"]
)
