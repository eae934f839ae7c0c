"""
Data Ingestion Routes
接收集群代理上报的快照
"""

from fastapi import APIRouter, Depends, Request

from fluxradar.core.exceptions import InvalidPayloadError
from fluxradar.core.logging import logger
from fluxradar.dependencies.registry import get_registry
from fluxradar.schemas.resource import parse_cluster_snapshot
from fluxradar.schemas.response import ErrorResponse, MessageResponse
from fluxradar.services.resource_registry import ResourceRegistry

router = APIRouter()

@router.post(
    "/data",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
async def receive_cluster_data(
    request: Request,
    registry: ResourceRegistry = Depends(get_registry),
):
    """接收集群快照并整体替换该集群的资源"""
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidPayloadError(f"请求体不是合法的 JSON: {e}") from e

    snapshot = parse_cluster_snapshot(body)
    registry.replace_cluster(snapshot.cluster_name, snapshot.resources)

    logger.info(
        f"集群数据接收成功: cluster={snapshot.cluster_name}, 资源数={len(snapshot.resources)}"
    )
    return MessageResponse(message="数据接收成功")
