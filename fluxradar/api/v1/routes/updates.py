"""
Live Update Routes
SSE 推送：注册表每次变更向每个连接发送一帧 update
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from fluxradar.config.settings import settings
from fluxradar.dependencies.registry import get_channel
from fluxradar.services.notification_service import NotificationChannel
from fluxradar.services.update_stream import UpdateStream

router = APIRouter()

@router.get("/updates")
async def stream_updates(
    request: Request,
    channel: NotificationChannel = Depends(get_channel),
) -> StreamingResponse:
    """建立 SSE 长连接，客户端断开后自动取消订阅"""
    stream = UpdateStream(
        channel,
        is_disconnected=request.is_disconnected,
        poll_interval=settings.SSE_DISCONNECT_POLL_SECONDS,
    )
    return StreamingResponse(
        stream.frames(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache, no-transform",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
