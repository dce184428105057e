"""Core data structures for kubemapper."""

from kubemapper.models.config import MapperConfig
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

__all__ = [
    "ConfigMapKeyRef",
    "ConfigMapRecord",
    "Container",
    "DeploymentRecord",
    "EnvFromSource",
    "EnvVar",
    "IngressPath",
    "IngressRecord",
    "IngressRule",
    "MapperConfig",
    "NamespaceSnapshot",
    "PodPhase",
    "PodRecord",
    "ResourceKind",
    "ServiceRecord",
    "Volume",
]
