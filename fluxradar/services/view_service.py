"""
View Service
前端视图推导：状态归一化 -> 筛选 -> 排序 -> 分页 -> 集群总览

全部为纯函数，每次都从最新快照和当前界面状态重新计算，不做缓存。
"""

import locale
import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz

from fluxradar.core.constants import (
    DEFAULT_PAGE_SIZE,
    DISPLAY_PLACEHOLDER,
    FILTER_ALL,
    PAGE_SIZE_CHOICES,
    RESOURCE_STATUSES,
    SORT_ASCENDING,
    SORT_DESCENDING,
    STATUS_CATEGORIES,
    UNKNOWN_STATUS,
)
from fluxradar.core.logging import logger

FILTER_FIELDS = ("cluster", "resourceType", "status", "namespace", "kind")


def _default_filters() -> Dict[str, str]:
    return {name: FILTER_ALL for name in FILTER_FIELDS}


@dataclass(frozen=True)
class ViewState:
    """界面选择状态"""
    filters: Dict[str, str] = field(default_factory=_default_filters)
    search: str = ""
    sort_key: Optional[str] = "name"
    sort_direction: str = SORT_ASCENDING
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass
class Page:
    """分页结果"""
    items: List[Dict[str, Any]]
    page: int
    page_size: int
    total: int
    total_pages: int


@dataclass
class ClusterOverview:
    """单个集群的状态统计"""
    cluster: str
    counts: Dict[str, int]
    latest_timestamp: Optional[str] = None


@dataclass
class ResourceView:
    """一次完整推导的结果"""
    page: Page
    overview: List[ClusterOverview]
    options: Dict[str, List[str]]


def _field(resource: Any, name: str) -> Any:
    if isinstance(resource, dict):
        return resource.get(name)
    return None


def normalize_status(status: Any) -> str:
    """不在固定枚举中的状态按 Unknown 处理，不修改原记录"""
    if isinstance(status, str) and status in STATUS_CATEGORIES:
        return status
    return UNKNOWN_STATUS


def status_category(status: Any) -> str:
    """状态的展示分组：ready|reconciling|error|suspended|unknown"""
    return STATUS_CATEGORIES[normalize_status(status)]


def with_filter(state: ViewState, name: str, value: str) -> ViewState:
    """修改单个筛选条件，同时回到第一页"""
    if name not in FILTER_FIELDS:
        raise ValueError(f"不支持的筛选字段: {name}")
    return replace(state, filters={**state.filters, name: value}, page=1)


def filter_resources(
    resources: List[Any],
    filters: Optional[Dict[str, str]] = None,
    search: str = "",
) -> List[Any]:
    """所有条件同时满足才保留；名称按不区分大小写的子串匹配"""
    filters = filters or {}
    term = (search or "").lower()

    def matches(resource: Any) -> bool:
        for name in FILTER_FIELDS:
            expected = filters.get(name, FILTER_ALL)
            if expected != FILTER_ALL and _field(resource, name) != expected:
                return False
        name_value = _field(resource, "name")
        return term in (name_value if isinstance(name_value, str) else "").lower()

    return [resource for resource in resources if matches(resource)]


def _sort_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def configure_collation(locale_name: str = "") -> bool:
    """设置排序使用的区域规则（LC_COLLATE）

    Args:
        locale_name: 区域名称，如 en_AU.UTF-8；空字符串表示使用系统环境变量中的设置

    Returns:
        设置失败时返回 False，排序退化为不区分大小写的码点顺序
    """
    try:
        locale.setlocale(locale.LC_COLLATE, locale_name)
    except locale.Error as e:
        logger.warning(f"无法设置排序区域 '{locale_name or '系统默认'}': {e}")
        return False
    logger.debug(f"排序区域: {locale.setlocale(locale.LC_COLLATE)}")
    return True


def _collation_key(value: Any):
    text = _sort_text(value)
    return (locale.strxfrm(text.casefold()), text)


def sort_resources(
    resources: List[Any],
    key: Optional[str],
    direction: str = SORT_ASCENDING,
) -> List[Any]:
    """按单个字段排序，缺失值视为空字符串；返回新列表"""
    if not key:
        return list(resources)
    return sorted(
        resources,
        key=lambda resource: _collation_key(_field(resource, key)),
        reverse=direction == SORT_DESCENDING,
    )


def toggle_sort(state: ViewState, key: str) -> ViewState:
    """同一字段升序时切换为降序，其余情况改为该字段升序"""
    if state.sort_key == key and state.sort_direction == SORT_ASCENDING:
        return replace(state, sort_direction=SORT_DESCENDING)
    return replace(state, sort_key=key, sort_direction=SORT_ASCENDING)


def paginate(resources: List[Any], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """页码从 1 开始，超出范围时收敛到 [1, 总页数]，返回收敛后那一页的内容"""
    if page_size not in PAGE_SIZE_CHOICES:
        raise ValueError(f"每页数量必须是 {PAGE_SIZE_CHOICES} 之一")
    total = len(resources)
    total_pages = max(1, math.ceil(total / page_size))
    current = min(max(1, page), total_pages)
    start = (current - 1) * page_size
    return Page(
        items=resources[start:start + page_size],
        page=current,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )


def parse_timestamp(value: Any) -> Optional[datetime]:
    """解析 ISO-8601 时间，无时区时按 UTC；无法解析返回 None"""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = pytz.UTC.localize(parsed)
    return parsed


def cluster_overview(resources: List[Any]) -> List[ClusterOverview]:
    """按集群统计各状态数量、总数和最近一次状态变化时间（基于未筛选的全量快照）"""
    overview: Dict[str, ClusterOverview] = {}
    latest: Dict[str, datetime] = {}

    for resource in resources:
        cluster = _field(resource, "cluster")
        if cluster not in overview:
            counts = {status: 0 for status in RESOURCE_STATUSES}
            counts["Total"] = 0
            overview[cluster] = ClusterOverview(cluster=cluster, counts=counts)
        entry = overview[cluster]

        entry.counts[normalize_status(_field(resource, "status"))] += 1
        entry.counts["Total"] += 1

        raw_time = _field(resource, "lastTransitionTime")
        parsed = parse_timestamp(raw_time)
        if parsed is not None and (cluster not in latest or parsed > latest[cluster]):
            latest[cluster] = parsed
            entry.latest_timestamp = raw_time

    return list(overview.values())


def filter_options(resources: List[Any]) -> Dict[str, List[str]]:
    """筛选下拉框选项：集群按出现顺序，命名空间与种类按字母排序"""
    clusters = dict.fromkeys(_field(r, "cluster") for r in resources)
    namespaces = {_field(r, "namespace") for r in resources}
    kinds = {_field(r, "kind") for r in resources}
    return {
        "cluster": [FILTER_ALL, *[c for c in clusters if isinstance(c, str)]],
        "namespace": [FILTER_ALL, *sorted(n for n in namespaces if isinstance(n, str))],
        "kind": [FILTER_ALL, *sorted(k for k in kinds if isinstance(k, str))],
    }


def display_value(value: Any) -> str:
    """空值显示占位符"""
    if value is None or value == "":
        return DISPLAY_PLACEHOLDER
    return str(value)


def format_timestamp(value: Any, timezone: str = "UTC") -> str:
    """把 ISO 时间转换到展示时区，无法解析时显示占位符"""
    parsed = parse_timestamp(value)
    if parsed is None:
        return DISPLAY_PLACEHOLDER
    return parsed.astimezone(pytz.timezone(timezone)).strftime("%d %b %Y, %H:%M")


def build_view(resources: List[Any], state: ViewState) -> ResourceView:
    """完整推导：筛选 -> 排序 -> 分页，总览与选项基于全量数据"""
    filtered = filter_resources(resources, state.filters, state.search)
    ordered = sort_resources(filtered, state.sort_key, state.sort_direction)
    return ResourceView(
        page=paginate(ordered, state.page, state.page_size),
        overview=cluster_overview(resources),
        options=filter_options(resources),
    )
