"""
Constants Module
"""

# 资源种类
RESOURCE_KINDS = [
    "GitRepository", "Kustomization", "HelmRelease", "Deployment", "Service", "Pod"
]

# 资源来源类型
RESOURCE_TYPES = {
    "FLUX": "flux",  # GitOps 管理
    "K8S": "k8s",  # 集群原生
}

# 资源状态，顺序即总览中的展示顺序
RESOURCE_STATUSES = [
    "Ready", "Available", "Active", "Running",
    "Reconciling",
    "Error", "Failed",
    "Suspended",
    "Unknown",
]

UNKNOWN_STATUS = "Unknown"

# 状态展示分组（同义状态共用一种样式）
STATUS_CATEGORIES = {
    "Ready": "ready",
    "Available": "ready",
    "Active": "ready",
    "Running": "ready",
    "Reconciling": "reconciling",
    "Error": "error",
    "Failed": "error",
    "Suspended": "suspended",
    "Unknown": "unknown",
}

# 筛选通配值
FILTER_ALL = "all"

# 排序方向
SORT_ASCENDING = "ascending"
SORT_DESCENDING = "descending"

# 分页常量
PAGE_SIZE_CHOICES = [10, 20, 50, 100]
DEFAULT_PAGE_SIZE = 10

# 空值占位符
DISPLAY_PLACEHOLDER = "N/A"

# 实时推送消息
UPDATE_EVENT = "update"
UPDATE_FRAME = f"data: {UPDATE_EVENT}\n\n"
