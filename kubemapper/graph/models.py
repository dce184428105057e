"""Data structures for the resource relationship graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import assert_never

from kubemapper.models.resources import NamespaceSnapshot, ResourceKind


class EdgeType(StrEnum):
    """Types of relationships between Kubernetes resources."""

    ROUTES_TO = "routes-to"
    SELECTS = "selects"
    MOUNTS = "mounts"
    INJECTS_ENV_FROM = "injects-env-from"
    INJECTS_VAR_FROM = "injects-var-from"


class UsageKind(StrEnum):
    """How a Pod consumes a ConfigMap."""

    MOUNTED_AS_VOLUME = "mounted-as-volume"
    USED_IN_ENV_FROM = "used-in-env-from"
    USED_IN_ENVIRONMENT_VARIABLE = "used-in-environment-variable"

    @property
    def label(self) -> str:
        return _USAGE_LABELS[self]


_USAGE_LABELS = {
    UsageKind.MOUNTED_AS_VOLUME: "Mounted as volume",
    UsageKind.USED_IN_ENV_FROM: "Used in envFrom",
    UsageKind.USED_IN_ENVIRONMENT_VARIABLE: "Used in environment variables",
}

# Display order, also the order edges for one (ConfigMap, Pod) pair are emitted in.
USAGE_ORDER: tuple[UsageKind, ...] = tuple(UsageKind)


def edge_type_for(usage: UsageKind) -> EdgeType:
    """Return the edge type recorded for a usage kind."""
    match usage:
        case UsageKind.MOUNTED_AS_VOLUME:
            return EdgeType.MOUNTS
        case UsageKind.USED_IN_ENV_FROM:
            return EdgeType.INJECTS_ENV_FROM
        case UsageKind.USED_IN_ENVIRONMENT_VARIABLE:
            return EdgeType.INJECTS_VAR_FROM
        case _:
            assert_never(usage)


def usage_kind_for(edge_type: EdgeType) -> UsageKind | None:
    """Inverse of :func:`edge_type_for`; None for edges that are not ConfigMap usage."""
    for usage in UsageKind:
        if edge_type_for(usage) == edge_type:
            return usage
    return None


@dataclass(frozen=True)
class GraphNode:
    """A node in the relationship graph representing a Kubernetes resource."""

    kind: ResourceKind
    namespace: str
    name: str


@dataclass(frozen=True)
class GraphEdge:
    """A typed, directed edge between two nodes in the relationship graph."""

    source: GraphNode
    target: GraphNode
    edge_type: EdgeType


@dataclass(frozen=True)
class RelationshipGraph:
    """Records and derived edges for one namespace.

    Built once by :func:`kubemapper.graph.builder.build_graph` and read-only
    afterwards. ``edges`` is sorted by source, then target name, so that
    iterating the edges of one source yields targets in ascending name order.
    """

    snapshot: NamespaceSnapshot
    edges: tuple[GraphEdge, ...] = ()
    _names: dict[ResourceKind, frozenset[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        snap = self.snapshot
        names = {
            ResourceKind.DEPLOYMENT: frozenset(d.name for d in snap.deployments),
            ResourceKind.INGRESS: frozenset(i.name for i in snap.ingresses),
            ResourceKind.SERVICE: frozenset(s.name for s in snap.services),
            ResourceKind.POD: frozenset(p.name for p in snap.pods),
            ResourceKind.CONFIG_MAP: frozenset(c.name for c in snap.config_maps),
        }
        object.__setattr__(self, "_names", names)

    @property
    def namespace(self) -> str:
        return self.snapshot.namespace

    @property
    def node_count(self) -> int:
        return sum(len(names) for names in self._names.values())

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def has_resource(self, kind: ResourceKind, name: str) -> bool:
        """Return True if a record of *kind* named *name* is in the snapshot."""
        return name in self._names[kind]

    def edges_from(
        self,
        kind: ResourceKind,
        name: str,
        edge_type: EdgeType | None = None,
    ) -> list[GraphEdge]:
        """Edges leaving one resource, in ascending target-name order."""
        return [
            edge
            for edge in self.edges
            if edge.source.kind == kind
            and edge.source.name == name
            and (edge_type is None or edge.edge_type == edge_type)
        ]

    def targets(
        self,
        kind: ResourceKind,
        name: str,
        edge_type: EdgeType | None = None,
    ) -> list[str]:
        """Distinct target names reached from one resource, in ascending order."""
        seen: list[str] = []
        for edge in self.edges_from(kind, name, edge_type):
            if edge.target.name not in seen:
                seen.append(edge.target.name)
        return seen

    def edges_between(self, source: GraphNode, target: GraphNode) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.source == source and edge.target == target]

    def usage_for(self, config_map: str, pod: str) -> list[UsageKind]:
        """Ways *pod* uses *config_map*, in display order; empty if unrelated."""
        edges = self.edges_between(
            GraphNode(ResourceKind.CONFIG_MAP, self.namespace, config_map),
            GraphNode(ResourceKind.POD, self.namespace, pod),
        )
        found = {usage_kind_for(edge.edge_type) for edge in edges}
        return [usage for usage in USAGE_ORDER if usage in found]

    def unresolved_routes(self) -> list[GraphEdge]:
        """``routes-to`` edges whose target Service is absent from the snapshot."""
        return [
            edge
            for edge in self.edges
            if edge.edge_type == EdgeType.ROUTES_TO and not self.has_resource(ResourceKind.SERVICE, edge.target.name)
        ]
