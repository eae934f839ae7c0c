"""
Test Resource Registry
"""

from fluxradar.services.notification_service import NotificationChannel
from fluxradar.services.resource_registry import ResourceRegistry

def _names(records, cluster):
    return [r["name"] for r in records if r["cluster"] == cluster]

def test_replace_is_exclusive_per_cluster(registry, make_resource):
    """测试同一集群的新快照完全替换旧快照"""
    registry.replace_cluster("A", [make_resource("old-1"), make_resource("old-2")])
    registry.replace_cluster("A", [make_resource("new-1")])

    records = registry.read_all()
    assert _names(records, "A") == ["new-1"]
    assert all(r["cluster"] == "A" for r in records)

def test_replace_does_not_touch_other_clusters(registry, make_resource):
    """测试替换某个集群不影响其他集群"""
    registry.replace_cluster("A", [make_resource("a-1")])
    registry.replace_cluster("B", [make_resource("b-1"), make_resource("b-2")])
    before = [r for r in registry.read_all() if r["cluster"] == "B"]

    registry.replace_cluster("A", [make_resource("a-2"), make_resource("a-3")])

    after = [r for r in registry.read_all() if r["cluster"] == "B"]
    assert after == before
    assert _names(registry.read_all(), "A") == ["a-2", "a-3"]

def test_cluster_field_is_overwritten(registry, make_resource):
    """测试记录自带的 cluster 字段会被快照的集群名覆盖"""
    registry.replace_cluster("prod", [make_resource("web", cluster="staging"), make_resource("api")])

    records = registry.read_all()
    assert [r["cluster"] for r in records] == ["prod", "prod"]

def test_incoming_records_are_not_mutated(registry, make_resource):
    """测试入库时复制记录，不修改调用方传入的对象"""
    incoming = make_resource("web", cluster="other")
    registry.replace_cluster("prod", [incoming])

    assert incoming["cluster"] == "other"
    registry.read_all()[0]["name"] = "changed"
    assert incoming["name"] == "web"

def test_empty_snapshot_clears_cluster(registry, make_resource):
    """测试空快照表示集群已无资源"""
    registry.replace_cluster("A", [make_resource("a-1"), make_resource("a-2")])
    registry.replace_cluster("B", [make_resource("b-1")])

    registry.replace_cluster("A", [])

    records = registry.read_all()
    assert _names(records, "A") == []
    assert _names(records, "B") == ["b-1"]
    assert registry.cluster_names() == ["B"]

def test_order_within_cluster_is_preserved(registry, make_resource):
    """测试集群内保持快照中的顺序"""
    names = ["zeta", "alpha", "mid"]
    registry.replace_cluster("A", [make_resource(n) for n in names])

    assert _names(registry.read_all(), "A") == names

def test_read_all_returns_new_list(registry, make_resource):
    """测试 read_all 返回的列表与内部状态隔离"""
    registry.replace_cluster("A", [make_resource("a-1")])
    snapshot = registry.read_all()
    snapshot.clear()

    assert registry.count() == 1

def test_notification_fires_once_per_replace(registry, make_resource):
    """测试每次替换恰好发布一次通知"""
    calls = []
    registry.channel.subscribe(lambda: calls.append(1))

    registry.replace_cluster("A", [make_resource("a-1")])
    registry.replace_cluster("B", [])
    registry.replace_cluster("A", [make_resource("a-2")])

    assert len(calls) == 3

def test_notification_sees_completed_swap(registry, make_resource):
    """测试通知发出时替换已经完成，回调中可以读取注册表"""
    seen = []
    registry.replace_cluster("A", [make_resource("old")])
    registry.channel.subscribe(lambda: seen.append(_names(registry.read_all(), "A")))

    registry.replace_cluster("A", [make_resource("new")])

    assert seen == [["new"]]

def test_malformed_records_are_stored_as_is(registry, make_resource):
    """测试单条记录不做校验，原样保存，并在下一次替换时被移除"""
    registry.replace_cluster("A", ["not-an-object", {"name": "partial"}])

    records = registry.read_all()
    assert records == ["not-an-object", {"name": "partial", "cluster": "A"}]

    registry.replace_cluster("A", [make_resource("a-1")])
    assert registry.read_all() == [make_resource("a-1", cluster="A")]

def test_initial_records_seed_registry(make_resource):
    """测试启动时加载初始数据"""
    registry = ResourceRegistry(
        NotificationChannel(),
        initial=[make_resource("web", cluster="prod"), make_resource("api", cluster="staging")],
    )

    assert registry.count() == 2
    assert registry.cluster_names() == ["prod", "staging"]

    registry.replace_cluster("prod", [])
    assert registry.cluster_names() == ["staging"]

def test_read_all_returns_record_copies(registry, make_resource):
    """测试修改 read_all 返回的记录不影响注册表"""
    registry.replace_cluster("A", [make_resource("a-1")])

    registry.read_all()[0]["name"] = "changed"
    registry.read_all()[0]["cluster"] = "B"

    assert _names(registry.read_all(), "A") == ["a-1"]
