"""
Update Stream
把变更通知桥接到单个前端连接的 SSE 推送流
"""

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Optional

from fluxradar.core.constants import UPDATE_FRAME
from fluxradar.core.logging import logger
from fluxradar.services.notification_service import NotificationChannel

STATE_OPEN = "OPEN"
STATE_CLOSED = "CLOSED"


class UpdateStream:
    """单个连接的推送流生命周期：OPEN -> CLOSED

    打开时向通知通道订阅回调，每收到一次通知输出一帧 ``data: update``。
    客户端断开、生成器被取消或关闭时，先取消订阅再结束流。
    """

    def __init__(
        self,
        channel: NotificationChannel,
        is_disconnected: Callable[[], Awaitable[bool]],
        poll_interval: float = 1.0,
    ):
        self.channel = channel
        self._is_disconnected = is_disconnected
        self.poll_interval = poll_interval
        self.state: Optional[str] = None
        self._queue: "asyncio.Queue[None]" = asyncio.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def open(self):
        """订阅变更通知，进入 OPEN 状态"""
        if self.state is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._unsubscribe = self.channel.subscribe(self._on_update)
        self.state = STATE_OPEN
        logger.info(f"推送连接已建立, 当前订阅数={self.channel.subscriber_count()}")

    def close(self):
        """取消订阅并进入 CLOSED 状态（可重复调用）"""
        if self.state == STATE_CLOSED:
            return
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.state = STATE_CLOSED
        logger.info(f"推送连接已关闭, 当前订阅数={self.channel.subscriber_count()}")

    def _on_update(self):
        # 通知可能来自其他线程，统一投递回事件循环
        self._loop.call_soon_threadsafe(self._queue.put_nowait, None)

    async def frames(self) -> AsyncIterator[str]:
        """按通知输出 SSE 帧，直到客户端断开"""
        self.open()
        try:
            while self.state == STATE_OPEN:
                if await self._is_disconnected():
                    logger.info("推送客户端已断开")
                    break
                try:
                    await asyncio.wait_for(self._queue.get(), timeout=self.poll_interval)
                except asyncio.TimeoutError:
                    continue
                yield UPDATE_FRAME
        finally:
            self.close()
