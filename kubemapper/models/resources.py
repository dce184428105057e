"""Resource records produced by the snapshot collector.

Records are immutable views of the few fields relationship mapping needs.
They are built fresh from the cluster on every run and never written back.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


def _freeze(record: object, *names: str) -> None:
    """Replace mapping fields of a frozen record with read-only copies."""
    for name in names:
        object.__setattr__(record, name, MappingProxyType(dict(getattr(record, name))))


class ResourceKind(StrEnum):
    """Kubernetes kinds known to the mapper."""

    DEPLOYMENT = "Deployment"
    INGRESS = "Ingress"
    SERVICE = "Service"
    POD = "Pod"
    CONFIG_MAP = "ConfigMap"


class PodPhase(StrEnum):
    """Pod lifecycle phase as reported in ``status.phase``."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str | None) -> PodPhase:
        """Map a raw phase string to a PodPhase; unrecognised values become UNKNOWN."""
        try:
            return cls(value or "")
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class IngressPath:
    """One HTTP path of an Ingress rule and the Service it forwards to."""

    path: str
    service_name: str


@dataclass(frozen=True)
class IngressRule:
    """A host rule; an empty host is the catch-all rule."""

    host: str = ""
    paths: tuple[IngressPath, ...] = ()


@dataclass(frozen=True)
class IngressRecord:
    name: str
    rules: tuple[IngressRule, ...] = ()

    kind = ResourceKind.INGRESS


@dataclass(frozen=True)
class ServiceRecord:
    name: str
    labels: Mapping[str, str] = field(default_factory=dict, hash=False)
    selector: Mapping[str, str] = field(default_factory=dict, hash=False)  # empty selects nothing
    service_type: str = "ClusterIP"
    cluster_ip: str = ""
    external_ips: tuple[str, ...] = ()

    kind = ResourceKind.SERVICE

    def __post_init__(self) -> None:
        _freeze(self, "labels", "selector")


@dataclass(frozen=True)
class Volume:
    """A declared pod volume; ``config_map_name`` is set for configMap volumes only."""

    name: str
    config_map_name: str | None = None


@dataclass(frozen=True)
class EnvFromSource:
    config_map_name: str | None = None


@dataclass(frozen=True)
class ConfigMapKeyRef:
    name: str
    key: str = ""


@dataclass(frozen=True)
class EnvVar:
    name: str
    config_map_key_ref: ConfigMapKeyRef | None = None


@dataclass(frozen=True)
class Container:
    name: str
    env_from: tuple[EnvFromSource, ...] = ()
    env: tuple[EnvVar, ...] = ()


@dataclass(frozen=True)
class PodRecord:
    name: str
    labels: Mapping[str, str] = field(default_factory=dict, hash=False)
    phase: PodPhase = PodPhase.UNKNOWN
    node_name: str | None = None
    volumes: tuple[Volume, ...] = ()
    containers: tuple[Container, ...] = ()

    kind = ResourceKind.POD

    def __post_init__(self) -> None:
        _freeze(self, "labels")


@dataclass(frozen=True)
class ConfigMapRecord:
    name: str

    kind = ResourceKind.CONFIG_MAP


@dataclass(frozen=True)
class DeploymentRecord:
    """Deployment summary for the flat listing; it takes no part in the graph."""

    name: str
    replicas: int | None = None  # None when the spec leaves it to the platform default
    available_replicas: int = 0


@dataclass(frozen=True)
class NamespaceSnapshot:
    """All records retrieved for one namespace in a single run.

    A snapshot is only ever constructed after every list call for the
    namespace succeeded, so consumers never see a partial namespace.
    """

    namespace: str
    deployments: tuple[DeploymentRecord, ...] = ()
    ingresses: tuple[IngressRecord, ...] = ()
    services: tuple[ServiceRecord, ...] = ()
    pods: tuple[PodRecord, ...] = ()
    config_maps: tuple[ConfigMapRecord, ...] = ()
