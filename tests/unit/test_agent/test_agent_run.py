"""
Test Agent Loop And Sender
"""

import json

import httpx
from fluxradar.agent.collector import KubernetesResourceCollector
from fluxradar.agent.main import run_agent
from fluxradar.agent.sender import SnapshotSender
from fluxradar.config.agent import AgentSettings

CONTROLLER_URL = "http://radar.test/api/data"

async def test_send_success():
    """测试推送成功"""
    received = []

    def handler(request):
        received.append(json.loads(request.content))
        return httpx.Response(200, json={"message": "ok"})

    sender = SnapshotSender(CONTROLLER_URL, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    assert await sender.send({"clusterName": "prod", "resources": []}) is True
    await sender.aclose()

    assert received == [{"clusterName": "prod", "resources": []}]

async def test_send_failures_are_not_raised():
    """测试看板返回错误或网络异常时只返回 False"""
    def rejecting(request):
        return httpx.Response(400, json={"message": "bad"})

    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    for handler in (rejecting, unreachable):
        sender = SnapshotSender(CONTROLLER_URL, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        assert await sender.send({"clusterName": "prod", "resources": []}) is False
        await sender.aclose()

async def test_run_agent_pushes_collected_snapshot():
    """测试采集结果以集群快照的形式推送"""
    posted = []

    def kubernetes(request):
        if request.url.path == "/apis/helm.toolkit.fluxcd.io/v2beta1/helmreleases":
            return httpx.Response(200, json={"items": [{
                "metadata": {"name": "ingress-nginx", "namespace": "ingress"},
                "status": {"conditions": [{"type": "Ready", "message": "Release reconciliation succeeded"}]},
            }]})
        return httpx.Response(200, json={"items": []})

    def controller(request):
        posted.append(json.loads(request.content))
        return httpx.Response(200, json={"message": "ok"})

    settings = AgentSettings(CLUSTER_NAME="prod", CONTROLLER_URL=CONTROLLER_URL)
    collector = KubernetesResourceCollector(
        settings,
        http_client=httpx.AsyncClient(base_url="https://k8s.test", transport=httpx.MockTransport(kubernetes)),
    )
    sender = SnapshotSender(
        CONTROLLER_URL,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(controller)),
    )

    await run_agent(settings, iterations=1, collector=collector, sender=sender)

    assert len(posted) == 1
    assert posted[0]["clusterName"] == "prod"
    assert [r["name"] for r in posted[0]["resources"]] == ["ingress-nginx"]
    assert posted[0]["resources"][0]["kind"] == "HelmRelease"
