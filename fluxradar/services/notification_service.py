"""
Notification Service
注册表变更通知：单一主题的发布/订阅通道
"""

import threading
from typing import Callable, List

from fluxradar.core.logging import logger

Handler = Callable[[], None]


class NotificationChannel:
    """注册表变更通知通道

    只有一个主题（"注册表已变更"），消息不带负载、不保留历史：
    订阅者只会收到订阅之后发布的通知。
    """

    def __init__(self):
        self._handlers: List[Handler] = []
        self._lock = threading.Lock()

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        """注册回调，返回取消订阅函数（可重复调用）"""
        with self._lock:
            self._handlers.append(handler)
            logger.debug(f"新增订阅者, 当前订阅数={len(self._handlers)}")

        unsubscribed = False

        def unsubscribe():
            nonlocal unsubscribed
            with self._lock:
                if unsubscribed:
                    return
                unsubscribed = True
                # 同一个回调可能被订阅多次，只移除本次注册的那一个
                for index, registered in enumerate(self._handlers):
                    if registered is handler:
                        del self._handlers[index]
                        break
                logger.debug(f"订阅者已移除, 当前订阅数={len(self._handlers)}")

        return unsubscribe

    def publish(self):
        """按订阅顺序同步调用所有回调，单个回调失败不影响其他回调"""
        with self._lock:
            handlers = list(self._handlers)

        for handler in handlers:
            try:
                handler()
            except Exception as e:
                logger.error(f"变更通知回调执行失败: {e}", exc_info=True)

    def subscriber_count(self) -> int:
        """当前订阅数"""
        with self._lock:
            return len(self._handlers)
