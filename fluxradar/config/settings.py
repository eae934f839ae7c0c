"""
Configuration Management
"""

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings  # type: ignore

# 计算项目根目录，确保无论从哪里运行都能找到根目录下的 .env
_CURRENT_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CURRENT_DIR.parent
_PROJECT_ROOT = _PACKAGE_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

class Settings(BaseSettings):
    """应用配置"""

    # 应用配置
    APP_NAME: str = "FluxRadar"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 服务器配置
    HOST: str = "0.0.0.0"
    PORT: int = 8443
    API_PREFIX: str = "/api"
    ALLOWED_HOSTS: List[str] = ["*"]
    # CORS配置
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # 资源注册表配置
    SEED_DEMO_DATA: bool = False  # 启动时是否加载演示数据

    # 实时推送配置（SSE）
    SSE_DISCONNECT_POLL_SECONDS: float = 1.0  # 空闲时检测客户端断开的间隔

    # 展示配置
    DISPLAY_TIMEZONE: str = "Australia/Melbourne"
    DEFAULT_PAGE_SIZE: int = 10
    COLLATION_LOCALE: str = ""  # 排序区域，空表示使用系统环境

    # 日志配置
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: str = ""

    class Config:
        env_file = _ENV_FILE
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # 忽略未声明的环境变量，避免启动失败

settings = Settings()
