"""Text rendering of a relationship graph.

Every function here is pure: it reads a :class:`RelationshipGraph` and
returns display lines. Writing and colouring them is the caller's job.
Resources are always listed in ascending name order so output does not
depend on the order the API returned them in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from kubemapper.graph.models import EdgeType, RelationshipGraph
from kubemapper.graph.selector import format_selector
from kubemapper.models.resources import ResourceKind

RULE_WIDTH = 80
_ARROW = "-" * 4 + ">"


class LineStyle(StrEnum):
    """Semantic style of a display line, mapped to a colour by the CLI."""

    PLAIN = "plain"
    TITLE = "title"
    BANNER = "banner"
    SECTION = "section"
    GROUP = "group"
    USAGE = "usage"
    ERROR = "error"


@dataclass(frozen=True)
class Line:
    text: str
    style: LineStyle = LineStyle.PLAIN


def rule() -> Line:
    return Line("-" * RULE_WIDTH)


def _blank() -> Line:
    return Line("")


def _group(heading: str, entries: list[Line]) -> list[Line]:
    """A titled group, or nothing at all when *entries* is empty."""
    if not entries:
        return []
    return [_blank(), Line(heading, LineStyle.GROUP), *entries]


def render_resource_listing(graph: RelationshipGraph) -> list[Line]:
    """Flat listing grouped as Deployments, Services, Pods, ConfigMaps.

    Groups with no resources are left out.
    """
    snap = graph.snapshot
    deployments = []
    for deploy in sorted(snap.deployments, key=lambda d: d.name):
        replicas = "-" if deploy.replicas is None else str(deploy.replicas)
        deployments.append(Line(f"{deploy.name} {replicas} {deploy.available_replicas}"))
    services = [
        Line(f"{svc.name} {svc.service_type} {svc.cluster_ip} [{' '.join(svc.external_ips)}]")
        for svc in sorted(snap.services, key=lambda s: s.name)
    ]
    pods = [
        Line(f"{pod.name} {pod.phase} {pod.node_name or '<none>'}") for pod in sorted(snap.pods, key=lambda p: p.name)
    ]
    config_maps = [Line(cm.name) for cm in sorted(snap.config_maps, key=lambda c: c.name)]

    return [
        Line(f"Resources in namespace: {graph.namespace}", LineStyle.TITLE),
        *_group("Deployments:", deployments),
        *_group("Services:", services),
        *_group("Pods:", pods),
        *_group("ConfigMaps:", config_maps),
    ]


def render_service_connections(graph: RelationshipGraph) -> list[Line]:
    """Two-level tree of each Service and the Pods its selector matches."""
    lines = [_blank(), Line(f"Service connections in namespace: {graph.namespace}", LineStyle.SECTION)]
    for svc in sorted(graph.snapshot.services, key=lambda s: s.name):
        lines += [_blank(), Line(f"Service: {svc.name}", LineStyle.GROUP)]
        if not svc.selector:
            continue
        lines.append(Line(f"├── Selectors: {format_selector(svc.selector)}"))
        pods = graph.targets(ResourceKind.SERVICE, svc.name, EdgeType.SELECTS)
        if pods:
            lines.append(Line("└── Connected Pods:"))
            lines += [Line(f"    {_ARROW} {pod}") for pod in pods]
    return lines


def render_relationships(graph: RelationshipGraph) -> list[Line]:
    """External Traffic -> Ingress -> Service -> Pod layers.

    Ingress routes to Services missing from the namespace are still shown,
    marked as not found, with nothing beneath them. Layers with no
    resources are left out, and a connector is drawn only where another
    layer follows it.
    """
    lines = [
        _blank(),
        Line(f"Resource relationships in namespace: {graph.namespace}", LineStyle.SECTION),
        _blank(),
    ]

    ingresses = sorted(graph.snapshot.ingresses, key=lambda i: i.name)
    services = sorted(graph.snapshot.services, key=lambda s: s.name)
    if not ingresses and not services:
        return lines
    lines += [Line("External Traffic"), Line("│")]

    if ingresses:
        lines += [Line("▼"), Line("[Ingress Layer]")]
        for ingress in ingresses:
            lines.append(Line(f"├── {ingress.name}"))
            for svc_name in graph.targets(ResourceKind.INGRESS, ingress.name, EdgeType.ROUTES_TO):
                suffix = "" if graph.has_resource(ResourceKind.SERVICE, svc_name) else " (not found)"
                lines.append(Line(f"│   {_ARROW} Service: {svc_name}{suffix}"))
        if services:
            lines.append(Line("│"))

    if services:
        lines += [Line("▼"), Line("[Service Layer]")]
        for svc in services:
            lines.append(Line(f"├── {svc.name}"))
            for pod in graph.targets(ResourceKind.SERVICE, svc.name, EdgeType.SELECTS):
                lines.append(Line(f"│   {_ARROW} Pod: {pod}"))

    return lines


def render_configmap_usage(graph: RelationshipGraph) -> list[Line]:
    """ConfigMap -> Pod tree with one bullet per usage kind."""
    lines = [_blank(), Line(f"ConfigMap usage in namespace: {graph.namespace}", LineStyle.USAGE)]
    for cm in sorted(graph.snapshot.config_maps, key=lambda c: c.name):
        lines += [_blank(), Line(f"ConfigMap: {cm.name}")]
        pods = graph.targets(ResourceKind.CONFIG_MAP, cm.name)
        if not pods:
            continue
        lines.append(Line("└── Used by pods:"))
        for pod in pods:
            lines.append(Line(f"    {_ARROW} {pod}"))
            lines += [Line(f"        - {kind.label}") for kind in graph.usage_for(cm.name, pod)]
    return lines


def render_namespace(graph: RelationshipGraph) -> list[Line]:
    """All views for one namespace, in output order."""
    return (
        render_resource_listing(graph)
        + render_service_connections(graph)
        + render_relationships(graph)
        + render_configmap_usage(graph)
    )
