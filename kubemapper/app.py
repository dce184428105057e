"""Application orchestration for kubemapper.

Processes namespaces strictly one after another:
    enumerate namespaces -> per namespace: collect -> build -> render -> emit

A ConnectivityError (connection or namespace enumeration) aborts the run.
A RetrievalError abandons only the namespace it occurred in; nothing from
that namespace is emitted beyond its banner and the error line.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from kubemapper.collector.source import KubernetesSnapshotSource, SnapshotSource, collect_snapshot
from kubemapper.errors import RetrievalError
from kubemapper.graph.builder import build_graph
from kubemapper.models.config import MapperConfig
from kubemapper.observability.logging import get_logger
from kubemapper.render.tree import Line, LineStyle, render_namespace, rule

Emit = Callable[[Line], None]


@dataclass
class MappingReport:
    """Outcome of one mapping run."""

    processed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class MapperApp:
    """Maps every namespace a SnapshotSource exposes.

    The source is injected so tests can run against an in-memory cluster.
    """

    def __init__(self, source: SnapshotSource, emit: Emit, namespaces: tuple[str, ...] = ()) -> None:
        self._source = source
        self._emit = emit
        self._only = set(namespaces)
        self._log = get_logger("app")

    def _emit_all(self, lines: list[Line]) -> None:
        for line in lines:
            self._emit(line)

    async def _selected_namespaces(self) -> list[str]:
        namespaces = await self._source.list_namespaces()
        if not self._only:
            return namespaces
        missing = sorted(self._only.difference(namespaces))
        if missing:
            self._log.warning("namespaces_not_found", namespaces=missing)
        return [ns for ns in namespaces if ns in self._only]

    async def map_namespace(self, namespace: str) -> list[Line]:
        """Collect, build and render one namespace.

        Raises RetrievalError if any list call for the namespace fails.
        """
        snapshot = await collect_snapshot(self._source, namespace)
        graph = build_graph(snapshot)
        return render_namespace(graph)

    async def run(self) -> MappingReport:
        """Map all selected namespaces.

        Raises ConnectivityError if the namespace list cannot be read.
        """
        report = MappingReport()
        self._emit(Line("Kubernetes Resource Mapper", LineStyle.TITLE))
        self._emit(rule())

        for namespace in await self._selected_namespaces():
            self._emit_all([rule(), Line(f"Analyzing namespace: {namespace}", LineStyle.BANNER), rule()])
            try:
                lines = await self.map_namespace(namespace)
            except RetrievalError as exc:
                self._log.error("namespace_skipped", namespace=namespace, kind=exc.kind, error=str(exc.cause))
                self._emit(Line(f"Error getting resources: {exc}", LineStyle.ERROR))
                report.skipped.append(namespace)
                continue
            self._emit_all(lines)
            self._emit(rule())
            report.processed.append(namespace)

        self._emit(Line("Resource mapping complete!", LineStyle.TITLE))
        self._log.info("mapping_complete", processed=len(report.processed), skipped=len(report.skipped))
        return report


async def run_mapper(config: MapperConfig, emit: Emit) -> MappingReport:
    """Connect to the cluster named by *config* and map it.

    Raises ConnectivityError if the cluster cannot be reached.
    """
    source = await KubernetesSnapshotSource.connect(config.cluster.kubeconfig_path)
    try:
        app = MapperApp(source, emit, namespaces=config.output.namespaces)
        return await app.run()
    finally:
        await source.close()
