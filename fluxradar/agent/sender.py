"""
Snapshot sender.
把集群快照推送到看板的数据接收接口
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx  # type: ignore
from httpx import Timeout

from fluxradar.core.logging import logger

DEFAULT_TIMEOUT = Timeout(15.0, connect=5.0)


class SnapshotSender:
    """快照推送；发送失败只记录日志，由下一个周期重新推送"""

    def __init__(
        self,
        controller_url: str,
        insecure_skip_verify: bool = False,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.controller_url = controller_url
        self._client = http_client or httpx.AsyncClient(
            timeout=DEFAULT_TIMEOUT,
            # https 地址默认使用系统根证书校验
            verify=not insecure_skip_verify,
        )

    async def aclose(self):
        await self._client.aclose()

    async def send(self, payload: Dict[str, Any]) -> bool:
        """POST 快照，成功返回 True"""
        try:
            response = await self._client.post(self.controller_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"推送快照失败: {self.controller_url} - {e}")
            return False

        if response.status_code != 200:
            logger.error(f"看板返回 {response.status_code}: {response.text}")
            return False

        logger.info(
            f"快照推送成功: cluster={payload.get('clusterName')}, "
            f"资源数={len(payload.get('resources') or [])}"
        )
        return True
