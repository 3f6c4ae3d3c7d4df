"""Brotli-compressed GraphML export of the cross-reference graph."""

import logging
from pathlib import Path
from xml.etree.ElementTree import Element

import brotli
import networkx as nx
from networkx.readwrite.graphml import GraphMLWriter

from seqgraph.domain.graph import ExportStats
from seqgraph.graph.store import InternedGraph

from .artifact import open_artifact

logger = logging.getLogger(__name__)

EdgeKey = tuple[str, str, int]


class InsertionOrderGraphMLWriter(GraphMLWriter):
    """GraphML writer that emits edges in a given order instead of adjacency order.

    networkx walks a multigraph source by source, which groups edges by their
    source node. Edges carry no attributes, so each one is written as a bare
    ``<edge>`` element keyed like networkx would key it.
    """

    def __init__(self, edge_order: list[EdgeKey], **kwargs):
        super().__init__(**kwargs)
        self.edge_order = edge_order

    def add_edges(self, G: nx.MultiDiGraph, graph_element: Element) -> None:
        for source, target, key in self.edge_order:
            graph_element.append(
                Element("edge", source=str(source), target=str(target), id=str(key))
            )


class GraphMLExporter:
    """Writes the graph as a GraphML document streamed through a Brotli compressor.

    Nodes are identified by their label text and written in handle order. Edges
    are written in insertion order, carry no attributes, and parallel edges are
    told apart by their multigraph key.
    """

    def __init__(self, quality: int = 11):
        """Initialize the exporter.

        Args:
            quality: Brotli compression quality, 0 (fastest) to 11 (smallest)
        """
        self.quality = quality

    def export(self, graph: InternedGraph, filepath: str | Path) -> ExportStats:
        """Write the graph to a compressed GraphML artifact.

        Args:
            graph: Finished graph, read-only during export
            filepath: Artifact path, fully rewritten

        Returns:
            Counts of the records written
        """
        logger.info("Creating GraphML data...")
        nx_graph, edge_order = self._build(graph)
        writer = InsertionOrderGraphMLWriter(edge_order)
        writer.add_graph_element(nx_graph)

        logger.info(f"Writing compressed form to {filepath}...")
        compressor = brotli.Compressor(quality=self.quality)
        bytes_written = 0
        with open_artifact(filepath) as f:
            for line in str(writer).splitlines():
                bytes_written += f.write(compressor.process(f"{line}\n".encode("utf-8")))
            bytes_written += f.write(compressor.finish())

        return ExportStats(
            path=Path(filepath),
            nodes=nx_graph.number_of_nodes(),
            edges=nx_graph.number_of_edges(),
            bytes_written=bytes_written,
        )

    @classmethod
    def to_networkx(cls, graph: InternedGraph) -> nx.MultiDiGraph:
        """Build a networkx multigraph keyed by label text."""
        return cls._build(graph)[0]

    @staticmethod
    def _build(graph: InternedGraph) -> tuple[nx.MultiDiGraph, list[EdgeKey]]:
        nx_graph = nx.MultiDiGraph()
        labels = [label.text for label in graph.labels()]
        nx_graph.add_nodes_from(labels)

        edge_order = []
        for source, target in graph.edge_handles():
            key = nx_graph.add_edge(labels[source], labels[target])
            edge_order.append((labels[source], labels[target], key))
        return nx_graph, edge_order


def load_graphmlz(filepath: str | Path) -> nx.MultiDiGraph:
    """Decompress and parse a GraphML artifact written by GraphMLExporter."""
    with open(filepath, "rb") as f:
        document = brotli.decompress(f.read()).decode("utf-8")
    return nx.parse_graphml(document, force_multigraph=True)
