"""Resource relationship graph for one namespace.

Built from a namespace snapshot: Service->Pod label selectors,
Ingress->Service HTTP routes and ConfigMap->Pod volume/env references.
"""

from kubemapper.graph.builder import build_graph
from kubemapper.graph.models import EdgeType, GraphEdge, GraphNode, RelationshipGraph, UsageKind
from kubemapper.graph.scanner import scan_configmap_usage
from kubemapper.graph.selector import format_selector, match_selector, selector_matches

__all__ = [
    "EdgeType",
    "GraphEdge",
    "GraphNode",
    "RelationshipGraph",
    "UsageKind",
    "build_graph",
    "format_selector",
    "match_selector",
    "scan_configmap_usage",
    "selector_matches",
]
