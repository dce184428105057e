"""Collector package for kubemapper.

Supplies per-namespace resource snapshots to the graph builder.

Submodules
----------
source  -- SnapshotSource protocol, live (kubernetes_asyncio) and in-memory sources,
           collect_snapshot().
convert -- kubernetes_asyncio API model -> resource record conversion.
"""

from kubemapper.collector.source import (
    InMemorySnapshotSource,
    KubernetesSnapshotSource,
    SnapshotSource,
    collect_snapshot,
)

__all__ = [
    "InMemorySnapshotSource",
    "KubernetesSnapshotSource",
    "SnapshotSource",
    "collect_snapshot",
]
