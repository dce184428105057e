"""Pure rendering of relationship graphs into display lines."""

from kubemapper.render.tree import (
    Line,
    LineStyle,
    render_configmap_usage,
    render_namespace,
    render_relationships,
    render_resource_listing,
    render_service_connections,
)

__all__ = [
    "Line",
    "LineStyle",
    "render_configmap_usage",
    "render_namespace",
    "render_relationships",
    "render_resource_listing",
    "render_service_connections",
]
