"""
Kubernetes resource collector.
从 Kubernetes API 采集 Flux 自定义资源（可选原生资源），生成集群快照中的资源记录
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import httpx  # type: ignore
from httpx import Timeout

from fluxradar.config.agent import AgentSettings
from fluxradar.core.logging import logger


@dataclass(frozen=True)
class FluxResourceType:
    kind: str
    group: str
    version: str
    plural: str

    def path(self, namespace: Optional[str]) -> str:
        scope = f"/namespaces/{namespace}" if namespace else ""
        return f"/apis/{self.group}/{self.version}{scope}/{self.plural}"


FLUX_RESOURCES = [
    FluxResourceType("GitRepository", "source.toolkit.fluxcd.io", "v1", "gitrepositories"),
    FluxResourceType("Kustomization", "kustomize.toolkit.fluxcd.io", "v1", "kustomizations"),
    FluxResourceType("HelmRelease", "helm.toolkit.fluxcd.io", "v2beta1", "helmreleases"),
    FluxResourceType("HelmRepository", "source.toolkit.fluxcd.io", "v1", "helmrepositories"),
    FluxResourceType("OCIRepository", "source.toolkit.fluxcd.io", "v1beta2", "ocirepositories"),
    FluxResourceType("HelmChart", "source.toolkit.fluxcd.io", "v1", "helmcharts"),
    FluxResourceType("ImageAutomation", "image.toolkit.fluxcd.io", "v1beta2", "imageautomations"),
    FluxResourceType("Notification", "notification.toolkit.fluxcd.io", "v1beta3", "alerts"),
]


def _first_condition(item: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    conditions = (item.get("status") or {}).get("conditions") or []
    for condition in conditions:
        if isinstance(condition, dict):
            return condition
    return None


def _metadata(item: Dict[str, Any]) -> Dict[str, Any]:
    return item.get("metadata") or {}


def map_flux_item(resource_type: FluxResourceType, item: Dict[str, Any]) -> Dict[str, Any]:
    """Flux 对象 -> 资源记录；状态取第一个 condition 的 type"""
    meta = _metadata(item)
    name = meta.get("name", "")
    namespace = meta.get("namespace", "")
    condition = _first_condition(item) or {}
    return {
        "id": f"{namespace}-{resource_type.kind.lower()}-{name}",
        "kind": resource_type.kind,
        "resourceType": "flux",
        "name": name,
        "namespace": namespace,
        "status": condition.get("type") or "Unknown",
        "message": condition.get("message") or "",
        "lastTransitionTime": condition.get("lastTransitionTime") or "",
    }


def _native_record(kind: str, short: str, item: Dict[str, Any], status: str,
                   message: str, last_transition_time: str) -> Dict[str, Any]:
    meta = _metadata(item)
    name = meta.get("name", "")
    namespace = meta.get("namespace", "")
    return {
        "id": f"{namespace}-{short}-{name}",
        "kind": kind,
        "resourceType": "k8s",
        "name": name,
        "namespace": namespace,
        "status": status or "Unknown",
        "message": message or "",
        "lastTransitionTime": last_transition_time or "",
    }


def map_pod(item: Dict[str, Any]) -> Dict[str, Any]:
    status = item.get("status") or {}
    condition = _first_condition(item) or {}
    return _native_record("Pod", "pod", item, status.get("phase"), status.get("message"),
                          condition.get("lastTransitionTime"))


def map_service(item: Dict[str, Any]) -> Dict[str, Any]:
    return _native_record("Service", "svc", item, "Active", "", "")


def map_deployment(item: Dict[str, Any]) -> Dict[str, Any]:
    conditions = (item.get("status") or {}).get("conditions") or []
    for condition in conditions:
        if isinstance(condition, dict) and condition.get("type") == "Available":
            return _native_record("Deployment", "deploy", item, "Available",
                                  condition.get("message"), condition.get("lastUpdateTime"))
    return _native_record("Deployment", "deploy", item, "Unknown", "", "")


def map_statefulset(item: Dict[str, Any]) -> Dict[str, Any]:
    condition = _first_condition(item) or {}
    return _native_record("StatefulSet", "sts", item, condition.get("type"),
                          condition.get("message"), condition.get("lastTransitionTime"))


def map_job(item: Dict[str, Any]) -> Dict[str, Any]:
    condition = _first_condition(item) or {}
    return _native_record("Job", "job", item, condition.get("type"),
                          condition.get("message"), condition.get("lastProbeTime"))


# 资源类型 -> (API 前缀, 复数名, 映射函数)
NATIVE_RESOURCES: Dict[str, tuple] = {
    "pods": ("/api/v1", "pods", map_pod),
    "services": ("/api/v1", "services", map_service),
    "deployments": ("/apis/apps/v1", "deployments", map_deployment),
    "statefulsets": ("/apis/apps/v1", "statefulsets", map_statefulset),
    "jobs": ("/apis/batch/v1", "jobs", map_job),
}


def _native_path(prefix: str, plural: str, namespace: Optional[str]) -> str:
    scope = f"/namespaces/{namespace}" if namespace else ""
    return f"{prefix}{scope}/{plural}"


def _read_file(path: str) -> Optional[str]:
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return f.read().strip()


def build_kubernetes_client(settings: AgentSettings) -> httpx.AsyncClient:
    """使用集群内 ServiceAccount 的 Token 与 CA 创建 API 客户端"""
    headers: Dict[str, str] = {}
    token = _read_file(settings.KUBERNETES_TOKEN_FILE)
    if token:
        headers["Authorization"] = f"Bearer {token}"
    verify: Any = settings.KUBERNETES_CA_FILE if os.path.exists(settings.KUBERNETES_CA_FILE) else True
    return httpx.AsyncClient(
        base_url=settings.KUBERNETES_API_SERVER.rstrip("/"),
        headers=headers,
        verify=verify,
        timeout=Timeout(settings.KUBERNETES_REQUEST_TIMEOUT, connect=5.0),
    )


class KubernetesResourceCollector:
    """采集单个集群的资源记录"""

    def __init__(self, settings: AgentSettings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = http_client or build_kubernetes_client(settings)

    async def aclose(self):
        await self._client.aclose()

    async def _list_items(self, path: str) -> List[Dict[str, Any]]:
        response = await self._client.get(path)
        response.raise_for_status()
        data = response.json()
        items = data.get("items") or [] if isinstance(data, dict) else []
        return [item for item in items if isinstance(item, dict)]

    async def _collect_path(
        self,
        path: str,
        mapper: Callable[[Dict[str, Any]], Dict[str, Any]],
        label: str,
    ) -> List[Dict[str, Any]]:
        try:
            items = await self._list_items(path)
        except (httpx.HTTPError, ValueError) as e:
            # 集群未安装对应 CRD 或无权限时跳过该类型
            logger.warning(f"跳过资源类型 {label}: {path} - {e}")
            return []
        return [mapper(item) for item in items]

    async def collect(self) -> List[Dict[str, Any]]:
        """按命名空间采集全部资源"""
        namespaces = self.settings.namespace_list() or [None]
        resources: List[Dict[str, Any]] = []

        if self.settings.INCLUDE_NATIVE_RESOURCES:
            for namespace in namespaces:
                for label, (prefix, plural, mapper) in NATIVE_RESOURCES.items():
                    resources.extend(await self._collect_path(
                        _native_path(prefix, plural, namespace), mapper, label
                    ))

        for resource_type in FLUX_RESOURCES:
            for namespace in namespaces:
                resources.extend(await self._collect_path(
                    resource_type.path(namespace),
                    lambda item, rt=resource_type: map_flux_item(rt, item),
                    resource_type.kind,
                ))

        logger.info(f"资源采集完成: cluster={self.settings.CLUSTER_NAME}, 资源数={len(resources)}")
        return resources
