"""
Demo Data
启动时可选加载的演示资源（SEED_DEMO_DATA=true）
"""

from typing import Any, Dict, List

from fluxradar.schemas.resource import Resource


def _flux(cluster: str, kind: str, namespace: str, name: str, status: str,
          message: str = "", last_transition_time: str = "") -> Resource:
    return Resource(
        id=f"{namespace}-{kind.lower()}-{name}",
        cluster=cluster,
        kind=kind,
        resource_type="flux",
        name=name,
        namespace=namespace,
        status=status,
        message=message,
        last_transition_time=last_transition_time,
    )


def _k8s(cluster: str, kind: str, short: str, namespace: str, name: str, status: str,
         message: str = "", last_transition_time: str = "") -> Resource:
    return Resource(
        id=f"{namespace}-{short}-{name}",
        cluster=cluster,
        kind=kind,
        resource_type="k8s",
        name=name,
        namespace=namespace,
        status=status,
        message=message,
        last_transition_time=last_transition_time,
    )


def demo_resources() -> List[Dict[str, Any]]:
    """两个演示集群的资源记录"""
    resources = [
        _flux("prod-cluster", "GitRepository", "flux-system", "flux-system", "Ready",
              "stored artifact for revision 'main@sha1:4f2a9c1'", "2024-05-20T10:00:00Z"),
        _flux("prod-cluster", "Kustomization", "flux-system", "apps", "Ready",
              "Applied revision: main@sha1:4f2a9c1", "2024-05-20T10:01:30Z"),
        _flux("prod-cluster", "HelmRelease", "monitoring", "kube-prometheus-stack", "Reconciling",
              "Running 'upgrade' action with timeout of 5m0s", "2024-05-20T10:03:00Z"),
        _flux("prod-cluster", "HelmRelease", "ingress", "ingress-nginx", "Failed",
              "install retries exhausted", "2024-05-20T09:55:12Z"),
        _k8s("prod-cluster", "Deployment", "deploy", "default", "web", "Available",
             "Deployment has minimum availability.", "2024-05-19T22:14:00Z"),
        _k8s("prod-cluster", "Service", "svc", "default", "web", "Active"),
        _k8s("prod-cluster", "Pod", "pod", "default", "web-7d9f8b6c5-x2kqp", "Running",
             "", "2024-05-19T22:13:41Z"),
        _flux("staging-cluster", "GitRepository", "flux-system", "flux-system", "Error",
              "failed to checkout and determine revision: unable to clone", "2024-05-20T08:30:00Z"),
        _flux("staging-cluster", "Kustomization", "flux-system", "apps", "Suspended",
              "", "2024-05-18T12:00:00Z"),
        _flux("staging-cluster", "Kustomization", "flux-system", "infrastructure", "Unknown"),
        _k8s("staging-cluster", "Deployment", "deploy", "default", "api", "Available",
             "Deployment has minimum availability.", "2024-05-20T07:45:10Z"),
    ]
    return [resource.to_record() for resource in resources]
