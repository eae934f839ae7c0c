"""
Agent Configuration
集群采集代理的配置，全部来自环境变量
"""

from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings  # type: ignore

from fluxradar.config.settings import _ENV_FILE

DEFAULT_INTERVAL_SECONDS = 120

# 集群内 ServiceAccount 挂载路径
SERVICE_ACCOUNT_DIR = "/var/run/secrets/kubernetes.io/serviceaccount"

class AgentSettings(BaseSettings):
    """采集代理配置"""

    CLUSTER_NAME: str = "dev-cluster"
    CONTROLLER_URL: str = "http://flux-radar-ui:8443/api/data"
    INTERVAL: int = DEFAULT_INTERVAL_SECONDS
    NAMESPACES: str = ""  # 逗号分隔，留空表示所有命名空间
    INSECURE_SKIP_VERIFY: bool = False
    INCLUDE_NATIVE_RESOURCES: bool = False

    # Kubernetes API 访问
    KUBERNETES_API_SERVER: str = "https://kubernetes.default.svc"
    KUBERNETES_TOKEN_FILE: str = f"{SERVICE_ACCOUNT_DIR}/token"
    KUBERNETES_CA_FILE: str = f"{SERVICE_ACCOUNT_DIR}/ca.crt"
    KUBERNETES_REQUEST_TIMEOUT: float = 15.0

    @field_validator("INTERVAL", mode="before")
    @classmethod
    def _fallback_interval(cls, value):
        # 无法解析或非正数时回退到默认间隔
        try:
            interval = int(value)
        except (TypeError, ValueError):
            return DEFAULT_INTERVAL_SECONDS
        return interval if interval > 0 else DEFAULT_INTERVAL_SECONDS

    def namespace_list(self) -> Optional[List[str]]:
        """解析命名空间列表，None 表示所有命名空间"""
        namespaces = [ns.strip() for ns in self.NAMESPACES.split(",") if ns.strip()]
        return namespaces or None

    class Config:
        env_file = _ENV_FILE
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"
