"""Shared fixtures for kubemapper integration tests.

Provides an in-memory cluster with three namespaces so tests can exercise
the full collect -> build -> render pipeline without a real cluster.
"""

from __future__ import annotations

import pytest

from kubemapper.collector.source import InMemorySnapshotSource
from kubemapper.models.resources import (
    ConfigMapKeyRef,
    ConfigMapRecord,
    Container,
    DeploymentRecord,
    EnvFromSource,
    EnvVar,
    IngressPath,
    IngressRecord,
    IngressRule,
    NamespaceSnapshot,
    PodPhase,
    PodRecord,
    ResourceKind,
    ServiceRecord,
    Volume,
)

# ---------------------------------------------------------------------------
# Record factory helpers
# ---------------------------------------------------------------------------


def make_pod(
    name: str,
    labels: dict[str, str] | None = None,
    config_map_volume: str | None = None,
    env_from: str | None = None,
    env_key_ref: str | None = None,
    phase: PodPhase = PodPhase.RUNNING,
    node_name: str | None = "node-a",
) -> PodRecord:
    """Create a PodRecord with a single container and optional ConfigMap references."""
    volumes = (Volume("config", config_map_name=config_map_volume),) if config_map_volume else ()
    container = Container(
        name="app",
        env_from=(EnvFromSource(env_from),) if env_from else (),
        env=(EnvVar("SETTING", ConfigMapKeyRef(env_key_ref, "setting")),) if env_key_ref else (),
    )
    return PodRecord(
        name=name,
        labels=labels or {},
        phase=phase,
        node_name=node_name,
        volumes=volumes,
        containers=(container,),
    )


def make_service(name: str, selector: dict[str, str] | None = None, cluster_ip: str = "10.96.0.10") -> ServiceRecord:
    return ServiceRecord(name=name, selector=selector or {}, cluster_ip=cluster_ip)


def make_ingress(name: str, routes: dict[str, str], host: str = "example.com") -> IngressRecord:
    """Create an Ingress with one host rule; *routes* maps path -> service name."""
    paths = tuple(IngressPath(path, service) for path, service in routes.items())
    return IngressRecord(name=name, rules=(IngressRule(host=host, paths=paths),))


# ---------------------------------------------------------------------------
# Cluster fixtures
# ---------------------------------------------------------------------------


def _ns1_snapshot() -> NamespaceSnapshot:
    """Service web selecting web-1; app-config mounted and env-injected into web-1."""
    return NamespaceSnapshot(
        namespace="ns1",
        deployments=(DeploymentRecord("web", replicas=1, available_replicas=1),),
        ingresses=(make_ingress("main", {"/": "web", "/blog": "ghost"}),),
        services=(make_service("web", {"app": "web"}),),
        pods=(
            make_pod("web-1", {"app": "web"}, config_map_volume="app-config", env_from="app-config"),
            make_pod("cache-1", {"app": "cache"}),
        ),
        config_maps=(ConfigMapRecord("app-config"),),
    )


def _ns2_snapshot() -> NamespaceSnapshot:
    return NamespaceSnapshot(
        namespace="ns2",
        deployments=(DeploymentRecord("api", replicas=2, available_replicas=0),),
        services=(make_service("api", {"app": "api"}),),
        pods=(make_pod("api-1", {"app": "api"}),),
    )


def _ns3_snapshot() -> NamespaceSnapshot:
    return NamespaceSnapshot(
        namespace="ns3",
        services=(make_service("db", {"app": "db"}),),
        pods=(make_pod("db-0", {"app": "db"}, env_key_ref="db-config"),),
        config_maps=(ConfigMapRecord("db-config"),),
    )


@pytest.fixture()
def ns1() -> NamespaceSnapshot:
    return _ns1_snapshot()


@pytest.fixture()
def cluster() -> InMemorySnapshotSource:
    return InMemorySnapshotSource([_ns1_snapshot(), _ns2_snapshot(), _ns3_snapshot()])


@pytest.fixture()
def cluster_with_ns2_pod_failure() -> InMemorySnapshotSource:
    return InMemorySnapshotSource(
        [_ns1_snapshot(), _ns2_snapshot(), _ns3_snapshot()],
        failures={("ns2", ResourceKind.POD): RuntimeError("the server was unable to return a response")},
    )
