"""
Logging Configuration
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Any, Mapping

from fluxradar.config.settings import settings


class PayloadFieldFilter(logging.Filter):
    """
    折叠日志中的大数组字段，避免整份集群快照被打印刷屏。
    会将以下键名的列表值替换为占位符：resources, items。
    """

    COLLAPSED_KEYS = {"resources", "items"}

    def _collapse_obj(self, obj: Any):
        if isinstance(obj, Mapping):
            collapsed = {}
            for k, v in obj.items():
                if k in self.COLLAPSED_KEYS and isinstance(v, (list, tuple)):
                    collapsed[k] = f"<{k} count={len(v)}>"
                else:
                    collapsed[k] = self._collapse_obj(v)
            return collapsed
        return obj

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, Mapping):
            record.msg = self._collapse_obj(record.msg)
        if isinstance(record.args, Mapping):
            record.args = self._collapse_obj(record.args)
        elif isinstance(record.args, tuple) and record.args:
            record.args = tuple(self._collapse_obj(a) for a in record.args)
        return True


def _tune_external_loggers():
    # 降低第三方库噪音
    for name in ("httpx", "httpcore", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None
):
    """
    配置日志系统

    Args:
        log_level: 日志级别（DEBUG, INFO, WARNING, ERROR, CRITICAL）
        log_file: 日志文件路径，为空时只输出到控制台
        log_format: 日志格式
    """
    level = log_level or settings.LOG_LEVEL
    log_path = log_file or settings.LOG_FILE
    fmt = log_format or settings.LOG_FORMAT

    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    numeric_level = level_map.get(level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # 清除现有的处理器
    root_logger.handlers = []

    # 控制台处理器
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(fmt))
    console_handler.addFilter(PayloadFieldFilter())
    root_logger.addHandler(console_handler)

    # 文件处理器
    if log_path:
        try:
            log_file_path = Path(log_path)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path, encoding='utf-8')
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(logging.Formatter(fmt))
            file_handler.addFilter(PayloadFieldFilter())
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"无法创建日志文件 {log_path}: {e}")

    # 配置第三方库的日志级别
    logging.getLogger('uvicorn').setLevel(logging.INFO)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('fastapi').setLevel(logging.INFO)

    _tune_external_loggers()


# 初始化日志
setup_logging()

# 创建全局日志记录器
logger = logging.getLogger('fluxradar')
