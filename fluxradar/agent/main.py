"""
Agent Entry Point
周期性采集集群资源并推送到看板
"""

import asyncio
from typing import Optional

from fluxradar.agent.collector import KubernetesResourceCollector
from fluxradar.agent.sender import SnapshotSender
from fluxradar.config.agent import AgentSettings
from fluxradar.core.logging import logger


async def run_agent(
    settings: Optional[AgentSettings] = None,
    iterations: Optional[int] = None,
    collector: Optional[KubernetesResourceCollector] = None,
    sender: Optional[SnapshotSender] = None,
):
    """采集 -> 推送 -> 等待；iterations 为空时一直运行"""
    settings = settings or AgentSettings()
    collector = collector or KubernetesResourceCollector(settings)
    sender = sender or SnapshotSender(settings.CONTROLLER_URL, settings.INSECURE_SKIP_VERIFY)

    logger.info(
        f"采集代理启动: cluster={settings.CLUSTER_NAME}, 目标={settings.CONTROLLER_URL}, "
        f"间隔={settings.INTERVAL}s, 命名空间={settings.namespace_list() or '全部'}"
    )

    completed = 0
    try:
        while iterations is None or completed < iterations:
            resources = await collector.collect()
            payload = {"clusterName": settings.CLUSTER_NAME, "resources": resources}
            logger.debug(payload)
            await sender.send(payload)

            completed += 1
            if iterations is not None and completed >= iterations:
                break
            await asyncio.sleep(settings.INTERVAL)
    finally:
        await collector.aclose()
        await sender.aclose()


def main():
    """命令行入口：fluxradar-agent"""
    try:
        asyncio.run(run_agent())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
