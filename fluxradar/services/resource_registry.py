"""
Resource Registry
按集群整体替换的内存资源注册表
"""

import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from fluxradar.core.logging import logger
from fluxradar.services.notification_service import NotificationChannel


class ResourceRegistry:
    """内存资源注册表

    状态是一个按集群划分的有序列表。每次接收某个集群的快照时，
    先移除该集群的全部旧记录，再追加新记录，最后发布一次变更通知。
    不保留历史，进程退出即丢失。
    """

    def __init__(
        self,
        channel: NotificationChannel,
        initial: Optional[Iterable[Dict[str, Any]]] = None,
    ):
        self.channel = channel
        self._lock = threading.Lock()
        # (集群名, 记录)；记录按原样保存，非对象记录也需要知道归属集群
        self._entries: List[Tuple[str, Any]] = [
            (record.get("cluster", ""), dict(record)) for record in (initial or [])
        ]

    def read_all(self) -> List[Any]:
        """返回当前全部记录的浅拷贝，调用方修改列表或记录都不影响注册表"""
        with self._lock:
            return [dict(record) if isinstance(record, dict) else record for _, record in self._entries]

    def replace_cluster(self, cluster_name: str, resources: Sequence[Any]):
        """用新快照整体替换某个集群的记录

        传入的记录会被复制并覆盖 cluster 字段；空列表表示该集群已无资源。
        """
        stamped = [_stamp(record, cluster_name) for record in resources]

        with self._lock:
            kept = [entry for entry in self._entries if entry[0] != cluster_name]
            removed = len(self._entries) - len(kept)
            kept.extend((cluster_name, record) for record in stamped)
            self._entries = kept

        logger.info(
            f"集群快照已更新: cluster={cluster_name}, 移除={removed}, 新增={len(stamped)}"
        )
        # 替换完成且释放锁之后再通知，回调中可以安全地读取注册表
        self.channel.publish()

    def cluster_names(self) -> List[str]:
        """当前存在记录的集群（按首次出现顺序）"""
        with self._lock:
            names = dict.fromkeys(name for name, _ in self._entries)
        return list(names)

    def count(self) -> int:
        with self._lock:
            return len(self._entries)


def _stamp(record: Any, cluster_name: str) -> Any:
    if isinstance(record, dict):
        return {**record, "cluster": cluster_name}
    return record
