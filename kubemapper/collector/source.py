"""Snapshot sources: where namespace resource listings come from.

SnapshotSource         -- protocol every source implements; passed explicitly
                          to the app instead of living in a global client.
KubernetesSnapshotSource -- reads a live cluster through kubernetes_asyncio.
InMemorySnapshotSource -- dict-backed source for tests and offline replays.

Every list call is made once. Failures are wrapped in RetrievalError (one
namespace) or ConnectivityError (connection / namespace enumeration) and are
never retried.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any, Protocol, TypeVar

from kubemapper.collector import convert
from kubemapper.errors import ConnectivityError, RetrievalError
from kubemapper.models.resources import (
    ConfigMapRecord,
    DeploymentRecord,
    IngressRecord,
    NamespaceSnapshot,
    PodRecord,
    ResourceKind,
    ServiceRecord,
)
from kubemapper.observability.logging import get_logger

_logger = get_logger("collector.source")

_R = TypeVar("_R")


class SnapshotSource(Protocol):
    """Read-only access to cluster resources, one namespace at a time."""

    async def list_namespaces(self) -> list[str]: ...

    async def list_deployments(self, namespace: str) -> list[DeploymentRecord]: ...

    async def list_ingresses(self, namespace: str) -> list[IngressRecord]: ...

    async def list_services(self, namespace: str) -> list[ServiceRecord]: ...

    async def list_pods(self, namespace: str) -> list[PodRecord]: ...

    async def list_config_maps(self, namespace: str) -> list[ConfigMapRecord]: ...


async def collect_snapshot(source: SnapshotSource, namespace: str) -> NamespaceSnapshot:
    """Fetch every kind for *namespace* and assemble a snapshot.

    The first failing call propagates its RetrievalError; no snapshot is
    returned for a namespace that was only partly read.
    """
    deployments = await source.list_deployments(namespace)
    services = await source.list_services(namespace)
    pods = await source.list_pods(namespace)
    config_maps = await source.list_config_maps(namespace)
    ingresses = await source.list_ingresses(namespace)
    _logger.debug(
        "snapshot_collected",
        namespace=namespace,
        deployments=len(deployments),
        services=len(services),
        pods=len(pods),
        config_maps=len(config_maps),
        ingresses=len(ingresses),
    )
    return NamespaceSnapshot(
        namespace=namespace,
        deployments=tuple(deployments),
        ingresses=tuple(ingresses),
        services=tuple(services),
        pods=tuple(pods),
        config_maps=tuple(config_maps),
    )


# ---------------------------------------------------------------------------
# Live cluster
# ---------------------------------------------------------------------------


class KubernetesSnapshotSource:
    """SnapshotSource backed by the Kubernetes API via kubernetes_asyncio.

    Build with :meth:`connect`; release the connection pool with :meth:`close`.
    """

    def __init__(self, api_client: Any) -> None:
        from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

        self._api_client = api_client
        self._core_v1 = k8s_client.CoreV1Api(api_client)
        self._apps_v1 = k8s_client.AppsV1Api(api_client)
        self._networking_v1 = k8s_client.NetworkingV1Api(api_client)

    @classmethod
    async def connect(cls, kubeconfig_path: str) -> KubernetesSnapshotSource:
        """Load *kubeconfig_path* and open an API client.

        Raises ConnectivityError if the kubeconfig cannot be loaded.
        """
        try:
            from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
            from kubernetes_asyncio import config as k8s_config  # type: ignore[import-untyped]

            configuration = k8s_client.Configuration()
            await k8s_config.load_kube_config(
                config_file=kubeconfig_path,
                client_configuration=configuration,
            )
            api_client = k8s_client.ApiClient(configuration=configuration)
        except Exception as exc:
            raise ConnectivityError(f"error building kubeconfig from {kubeconfig_path}: {exc}") from exc
        _logger.info("k8s client configured from kubeconfig", path=kubeconfig_path)
        return cls(api_client)

    async def close(self) -> None:
        await self._api_client.close()

    async def list_namespaces(self) -> list[str]:
        try:
            result = await self._core_v1.list_namespace()
        except Exception as exc:
            raise ConnectivityError(f"error getting namespaces: {exc}") from exc
        return [ns.metadata.name for ns in result.items]

    async def _list(
        self,
        kind: ResourceKind,
        namespace: str,
        call: Callable[..., Awaitable[Any]],
        to_record: Callable[[Any], _R],
    ) -> list[_R]:
        # A malformed object fails its namespace like a failed call does.
        try:
            result = await call(namespace)
            return [to_record(item) for item in result.items]
        except Exception as exc:
            raise RetrievalError(kind, namespace, exc) from exc

    async def list_deployments(self, namespace: str) -> list[DeploymentRecord]:
        return await self._list(
            ResourceKind.DEPLOYMENT, namespace, self._apps_v1.list_namespaced_deployment, convert.to_deployment
        )

    async def list_ingresses(self, namespace: str) -> list[IngressRecord]:
        return await self._list(
            ResourceKind.INGRESS, namespace, self._networking_v1.list_namespaced_ingress, convert.to_ingress
        )

    async def list_services(self, namespace: str) -> list[ServiceRecord]:
        return await self._list(
            ResourceKind.SERVICE, namespace, self._core_v1.list_namespaced_service, convert.to_service
        )

    async def list_pods(self, namespace: str) -> list[PodRecord]:
        return await self._list(ResourceKind.POD, namespace, self._core_v1.list_namespaced_pod, convert.to_pod)

    async def list_config_maps(self, namespace: str) -> list[ConfigMapRecord]:
        return await self._list(
            ResourceKind.CONFIG_MAP, namespace, self._core_v1.list_namespaced_config_map, convert.to_config_map
        )


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


class InMemorySnapshotSource:
    """SnapshotSource serving fixed snapshots.

    ``failures`` maps ``(namespace, kind)`` to the exception that list call
    should fail with; ``namespace_error`` makes namespace enumeration fail.
    ``calls`` records every list call in order.
    """

    def __init__(
        self,
        snapshots: Iterable[NamespaceSnapshot] = (),
        failures: dict[tuple[str, ResourceKind], Exception] | None = None,
        namespace_error: Exception | None = None,
    ) -> None:
        self._snapshots = {snap.namespace: snap for snap in snapshots}
        self._failures = failures or {}
        self._namespace_error = namespace_error
        self.calls: list[tuple[str, str]] = []

    async def list_namespaces(self) -> list[str]:
        self.calls.append(("Namespace", ""))
        if self._namespace_error is not None:
            raise ConnectivityError(f"error getting namespaces: {self._namespace_error}") from self._namespace_error
        return list(self._snapshots)

    def _records(self, kind: ResourceKind, namespace: str, records: Sequence[_R]) -> list[_R]:
        self.calls.append((kind, namespace))
        failure = self._failures.get((namespace, kind))
        if failure is not None:
            raise RetrievalError(kind, namespace, failure)
        return list(records)

    def _snapshot(self, namespace: str) -> NamespaceSnapshot:
        return self._snapshots.get(namespace) or NamespaceSnapshot(namespace=namespace)

    async def list_deployments(self, namespace: str) -> list[DeploymentRecord]:
        return self._records(ResourceKind.DEPLOYMENT, namespace, self._snapshot(namespace).deployments)

    async def list_ingresses(self, namespace: str) -> list[IngressRecord]:
        return self._records(ResourceKind.INGRESS, namespace, self._snapshot(namespace).ingresses)

    async def list_services(self, namespace: str) -> list[ServiceRecord]:
        return self._records(ResourceKind.SERVICE, namespace, self._snapshot(namespace).services)

    async def list_pods(self, namespace: str) -> list[PodRecord]:
        return self._records(ResourceKind.POD, namespace, self._snapshot(namespace).pods)

    async def list_config_maps(self, namespace: str) -> list[ConfigMapRecord]:
        return self._records(ResourceKind.CONFIG_MAP, namespace, self._snapshot(namespace).config_maps)
