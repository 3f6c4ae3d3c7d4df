from pathlib import Path
from typing import Protocol

from seqgraph.domain.graph import ExportStats
from seqgraph.graph.store import InternedGraph


class GraphExporter(Protocol):
    """Protocol for graph artifact writers."""

    def export(self, graph: InternedGraph, filepath: str | Path) -> ExportStats:
        """Write the finished graph to an artifact, replacing any previous one."""
        ...
