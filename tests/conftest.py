"""
Test Configuration
"""

import pytest
from fastapi.testclient import TestClient
from fluxradar.main import create_app
from fluxradar.services.notification_service import NotificationChannel
from fluxradar.services.resource_registry import ResourceRegistry

@pytest.fixture
def channel():
    """变更通知通道"""
    return NotificationChannel()

@pytest.fixture
def registry(channel):
    """空的资源注册表"""
    return ResourceRegistry(channel)

@pytest.fixture
def client(registry):
    """创建测试客户端"""
    app = create_app(registry=registry)
    with TestClient(app) as test_client:
        yield test_client

@pytest.fixture
def make_resource():
    """构造资源记录"""
    def _make(name, cluster="", status="Ready", kind="Kustomization", namespace="flux-system",
              resource_type="flux", **extra):
        record = {
            "id": f"{namespace}-{kind.lower()}-{name}",
            "cluster": cluster,
            "kind": kind,
            "resourceType": resource_type,
            "name": name,
            "namespace": namespace,
            "status": status,
            "message": "",
            "lastTransitionTime": "",
        }
        record.update(extra)
        return record
    return _make
