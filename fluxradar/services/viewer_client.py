"""
Viewer Client
前端数据客户端：缓存最近一次快照，收到变更通知后重新拉取
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional

import httpx  # type: ignore
from httpx import Timeout

from fluxradar.config.settings import settings
from fluxradar.core.constants import PAGE_SIZE_CHOICES, UPDATE_EVENT
from fluxradar.core.exceptions import FetchFailureError
from fluxradar.core.logging import logger
from fluxradar.services.view_service import (
    ResourceView,
    ViewState,
    build_view,
    configure_collation,
    format_timestamp,
)

DEFAULT_TIMEOUT = Timeout(15.0, connect=5.0)


class ViewerClient:
    """资源看板客户端

    拉取失败时保留上一次的快照，界面不会因为临时故障变成空白。
    推送流断开后按指数退避自动重连，重连后先全量拉取一次。
    """

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        initial_backoff: float = 1.0,
        max_backoff: float = 30.0,
        display_timezone: Optional[str] = None,
        default_page_size: Optional[int] = None,
        collation_locale: Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.display_timezone = display_timezone or settings.DISPLAY_TIMEZONE
        page_size = default_page_size or settings.DEFAULT_PAGE_SIZE
        if page_size not in PAGE_SIZE_CHOICES:
            logger.warning(f"每页数量 {page_size} 无效，使用 {PAGE_SIZE_CHOICES[0]}")
            page_size = PAGE_SIZE_CHOICES[0]
        self.default_page_size = page_size
        configure_collation(settings.COLLATION_LOCALE if collation_locale is None else collation_locale)
        self._client = http_client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
        self._owns_client = http_client is None
        self.initial_backoff = initial_backoff
        self.max_backoff = max_backoff
        self.resources: List[Any] = []

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def fetch_resources(self) -> List[Any]:
        """拉取全量快照，失败时抛出 FetchFailureError"""
        url = f"{self.base_url}/resources"
        try:
            response = await self._client.get(url, headers={"Cache-Control": "no-cache"})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise FetchFailureError(f"拉取资源失败: {url} - {e}") from e
        except ValueError as e:
            raise FetchFailureError(f"资源响应不是合法 JSON: {url}") from e
        if not isinstance(data, list):
            raise FetchFailureError(f"资源响应格式错误，应为数组: {type(data).__name__}")
        return data

    async def refresh(self) -> bool:
        """刷新本地快照；失败时记录日志并保留旧数据"""
        try:
            self.resources = await self.fetch_resources()
        except FetchFailureError as e:
            logger.warning(f"[{e.code}] {e.message}，继续显示上一次的数据")
            return False
        logger.debug(f"资源快照已刷新: {len(self.resources)} 条")
        return True

    async def _consume_updates(self):
        url = f"{self.base_url}/updates"
        async with self._client.stream(
            "GET",
            url,
            headers={"Accept": "text/event-stream"},
            timeout=Timeout(DEFAULT_TIMEOUT.connect, read=None),
        ) as response:
            response.raise_for_status()
            logger.info(f"推送流已连接: {url}")
            await self.refresh()
            async for line in response.aiter_lines():
                if line.startswith("data:") and line[len("data:"):].strip() == UPDATE_EVENT:
                    await self.refresh()

    async def listen(self, stop_event: Optional[asyncio.Event] = None):
        """监听推送流直到 stop_event 被设置，断线后退避重连

        读取任务与 stop_event 并发等待，stop_event 先完成时取消读取任务并关闭连接。
        """
        stop_event = stop_event or asyncio.Event()
        stop_waiter = asyncio.ensure_future(stop_event.wait())
        backoff = self.initial_backoff
        consumer: Optional[asyncio.Future] = None

        try:
            while not stop_event.is_set():
                consumer = asyncio.ensure_future(self._consume_updates())
                await asyncio.wait({consumer, stop_waiter}, return_when=asyncio.FIRST_COMPLETED)
                if not consumer.done():
                    consumer.cancel()
                    await asyncio.wait({consumer})
                    logger.info("推送流监听已停止")
                    break

                try:
                    consumer.result()
                    delay = backoff = self.initial_backoff
                except httpx.HTTPError as e:
                    delay = backoff
                    backoff = min(backoff * 2, self.max_backoff)
                    error = FetchFailureError(f"推送流连接失败: {e}")
                    logger.warning(f"[{error.code}] {error.message}，{delay:.1f}s 后重连")

                await asyncio.wait({stop_waiter}, timeout=delay)
        finally:
            stop_waiter.cancel()
            if consumer is not None and not consumer.done():
                consumer.cancel()

    def view(self, state: Optional[ViewState] = None) -> ResourceView:
        """基于缓存快照推导当前视图"""
        return build_view(self.resources, state or ViewState(page_size=self.default_page_size))

    def format_time(self, value: Any) -> str:
        """按展示时区格式化时间"""
        return format_timestamp(value, self.display_timezone)
