"""Relationship graph construction for one namespace.

Derives three families of edges from a :class:`NamespaceSnapshot`:

    Service  --selects-->    Pod      (label selector match)
    Ingress  --routes-to-->  Service  (HTTP path backend, target may be absent)
    ConfigMap --mounts / injects-env-from / injects-var-from--> Pod

The builder is a pure function of the snapshot: the same snapshot always
yields the same, identically ordered, edge tuple.
"""

from __future__ import annotations

from kubemapper.graph.models import USAGE_ORDER, EdgeType, GraphEdge, GraphNode, RelationshipGraph, edge_type_for
from kubemapper.graph.scanner import scan_configmap_usage
from kubemapper.graph.selector import match_selector
from kubemapper.models.resources import NamespaceSnapshot, ResourceKind
from kubemapper.observability.logging import get_logger

_logger = get_logger("graph.builder")

_EDGE_ORDER = {edge_type: index for index, edge_type in enumerate(EdgeType)}


def _edge_sort_key(edge: GraphEdge) -> tuple[str, str, str, str, int]:
    return (
        edge.source.kind,
        edge.source.name,
        edge.target.kind,
        edge.target.name,
        _EDGE_ORDER[edge.edge_type],
    )


def _selector_edges(snapshot: NamespaceSnapshot) -> list[GraphEdge]:
    edges = []
    for service in snapshot.services:
        source = GraphNode(service.kind, snapshot.namespace, service.name)
        for pod in match_selector(service.selector, snapshot.pods):
            edges.append(
                GraphEdge(
                    source=source,
                    target=GraphNode(pod.kind, snapshot.namespace, pod.name),
                    edge_type=EdgeType.SELECTS,
                )
            )
    return edges


def _route_edges(snapshot: NamespaceSnapshot) -> list[GraphEdge]:
    edges = []
    for ingress in snapshot.ingresses:
        source = GraphNode(ingress.kind, snapshot.namespace, ingress.name)
        for rule in ingress.rules:
            for path in rule.paths:
                edges.append(
                    GraphEdge(
                        source=source,
                        target=GraphNode(ResourceKind.SERVICE, snapshot.namespace, path.service_name),
                        edge_type=EdgeType.ROUTES_TO,
                    )
                )
    return edges


def _usage_edges(snapshot: NamespaceSnapshot) -> list[GraphEdge]:
    edges = []
    for config_map in snapshot.config_maps:
        source = GraphNode(config_map.kind, snapshot.namespace, config_map.name)
        for pod in snapshot.pods:
            usages = scan_configmap_usage(pod, config_map.name)
            target = GraphNode(pod.kind, snapshot.namespace, pod.name)
            for usage in USAGE_ORDER:
                if usage in usages:
                    edges.append(GraphEdge(source=source, target=target, edge_type=edge_type_for(usage)))
    return edges


def build_graph(snapshot: NamespaceSnapshot) -> RelationshipGraph:
    """Build the relationship graph for one namespace snapshot.

    Services with an empty selector select nothing. Ingress routes are kept
    even when the named Service does not exist; every other edge joins two
    records present in the snapshot. Duplicate edges collapse to one.
    """
    edges = _selector_edges(snapshot) + _route_edges(snapshot) + _usage_edges(snapshot)
    unique = sorted(set(edges), key=_edge_sort_key)

    graph = RelationshipGraph(snapshot=snapshot, edges=tuple(unique))
    _logger.debug(
        "graph_built",
        namespace=snapshot.namespace,
        nodes=graph.node_count,
        edges=graph.edge_count,
        unresolved_routes=len(graph.unresolved_routes()),
    )
    return graph
