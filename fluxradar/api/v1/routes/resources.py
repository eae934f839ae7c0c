"""
Resource Read Routes
"""

from typing import Any, List

from fastapi import APIRouter, Depends, Response

from fluxradar.dependencies.registry import get_registry
from fluxradar.services.resource_registry import ResourceRegistry

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
}

@router.get("/resources", response_model=List[Any])
async def list_resources(
    response: Response,
    registry: ResourceRegistry = Depends(get_registry),
):
    """返回所有集群的当前资源（不分页、不缓存，推导在前端完成）"""
    response.headers.update(NO_CACHE_HEADERS)
    return registry.read_all()
