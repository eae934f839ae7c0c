"""
Resource Schemas
集群资源记录与集群快照
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, StrictStr, ValidationError

from fluxradar.core.exceptions import InvalidPayloadError


class Resource(BaseModel):
    """单个集群内观测到的资源"""
    id: str = Field(..., description="集群内唯一标识")
    cluster: str = Field("", description="所属集群，入库时由注册表覆盖")
    kind: str = Field(..., description="资源种类，如 GitRepository、Pod")
    resource_type: Literal["flux", "k8s"] = Field(..., alias="resourceType", description="flux|k8s")
    name: str
    namespace: str
    status: str = Field("Unknown", description="资源状态")
    message: str = ""
    last_transition_time: Optional[str] = Field("", alias="lastTransitionTime")

    class Config:
        populate_by_name = True

    def to_record(self) -> Dict[str, Any]:
        """转换为接口使用的 JSON 记录（驼峰字段）"""
        return self.model_dump(by_alias=True)


class ClusterSnapshot(BaseModel):
    """集群快照：一个集群在某一时刻上报的全部资源"""
    cluster_name: StrictStr = Field(..., alias="clusterName", min_length=1)
    # 单条资源不做结构校验，原样入库
    resources: List[Any]

    class Config:
        populate_by_name = True


def parse_cluster_snapshot(body: Any) -> ClusterSnapshot:
    """校验快照顶层结构，不合法时抛出 InvalidPayloadError"""
    if not isinstance(body, dict):
        raise InvalidPayloadError(
            "ClusterData 格式无效，应为 { clusterName: string, resources: Resource[] }"
        )
    try:
        return ClusterSnapshot.model_validate(body)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(p) for p in err["loc"]) for err in e.errors()
        )
        raise InvalidPayloadError(
            f"ClusterData 格式无效，应为 {{ clusterName: string, resources: Resource[] }}（字段: {fields}）"
        ) from e
