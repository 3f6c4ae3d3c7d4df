"""Compact binary export of the cross-reference graph.

Layout, with no header, magic number, version or record count:

    node: 0x01 | u32 LE numeric id               | 0x0A   (6 bytes)
    edge: 0x00 | u32 LE source id | u32 LE target | 0x0A   (10 bytes)

All node records come first in handle order, then all edge records in
insertion order. Payload bytes can equal 0x0A, so readers must size records
by their tag and never search for the terminator.
"""

import logging
from pathlib import Path
from typing import Literal

import numpy as np
from pydantic import BaseModel

from seqgraph.domain.graph import ExportStats
from seqgraph.domain.label import represent
from seqgraph.errors import CompactFormatError, LabelParseError
from seqgraph.graph.store import InternedGraph

from .artifact import open_artifact

logger = logging.getLogger(__name__)

NODE_TAG = 0x01
EDGE_TAG = 0x00
TERMINATOR = 0x0A

NODE_RECORD = np.dtype([("tag", "u1"), ("id", "<u4"), ("end", "u1")])
EDGE_RECORD = np.dtype([("tag", "u1"), ("source", "<u4"), ("target", "<u4"), ("end", "u1")])

MalformedLabelPolicy = Literal["abort", "skip"]


class CompactGraph(BaseModel):
    """Graph decoded from a compact binary stream.

    Attributes:
        node_ids: Numeric node ids in file order
        edges: ``(source, target)`` numeric id pairs in file order
    """

    node_ids: list[int] = []
    edges: list[tuple[int, int]] = []


class CompactBinaryExporter:
    """Writes the graph as fixed-length tagged records."""

    def __init__(self, on_malformed: MalformedLabelPolicy = "abort"):
        """Initialize the exporter.

        Args:
            on_malformed: What to do with a label that has no numeric representation.
                "abort" re-raises the LabelParseError. "skip" logs a warning and leaves
                out the node and every edge touching it.
        """
        self.on_malformed = on_malformed

    def export(self, graph: InternedGraph, filepath: str | Path) -> ExportStats:
        """Write the graph to a compact binary artifact.

        Args:
            graph: Finished graph, read-only during export
            filepath: Artifact path, fully rewritten

        Returns:
            Counts of the records written

        Raises:
            LabelParseError: If a label is malformed and the policy is "abort"
        """
        logger.info(f"Writing compact binary data to {filepath}...")

        ids, valid, skipped = self._numeric_ids(graph)
        node_records = self.encode_nodes(ids[valid])

        pairs = np.fromiter(
            (handle for pair in graph.edge_handles() for handle in pair),
            dtype=np.int64,
            count=2 * graph.edge_count,
        ).reshape(-1, 2)
        if skipped:
            pairs = pairs[valid[pairs[:, 0]] & valid[pairs[:, 1]]]
        edge_records = self.encode_edges(ids[pairs[:, 0]], ids[pairs[:, 1]])

        with open_artifact(filepath) as f:
            f.write(node_records.tobytes())
            f.write(edge_records.tobytes())

        stats = ExportStats(
            path=Path(filepath),
            nodes=len(node_records),
            edges=len(edge_records),
            bytes_written=node_records.nbytes + edge_records.nbytes,
            skipped_labels=skipped,
        )
        logger.info(
            f"Wrote {stats.nodes} nodes and {stats.edges} edges ({stats.bytes_written} bytes)"
        )
        return stats

    def _numeric_ids(self, graph: InternedGraph) -> tuple[np.ndarray, np.ndarray, list[str]]:
        """Compute the numeric representation of every node, indexed by handle."""
        ids = np.zeros(graph.node_count, dtype=np.uint32)
        valid = np.ones(graph.node_count, dtype=bool)
        skipped = []

        for handle, label in enumerate(graph.labels()):
            try:
                ids[handle] = represent(label)
            except LabelParseError as e:
                if self.on_malformed == "abort":
                    raise
                logger.warning(f"Skipping node: {e}")
                valid[handle] = False
                skipped.append(label.text)

        return ids, valid, skipped

    @staticmethod
    def encode_nodes(ids: np.ndarray) -> np.ndarray:
        records = np.empty(len(ids), dtype=NODE_RECORD)
        records["tag"] = NODE_TAG
        records["id"] = ids
        records["end"] = TERMINATOR
        return records

    @staticmethod
    def encode_edges(sources: np.ndarray, targets: np.ndarray) -> np.ndarray:
        records = np.empty(len(sources), dtype=EDGE_RECORD)
        records["tag"] = EDGE_TAG
        records["source"] = sources
        records["target"] = targets
        records["end"] = TERMINATOR
        return records


def read_compact_binary(data: bytes) -> CompactGraph:
    """Decode a compact binary stream by dispatching on each record's tag byte.

    Args:
        data: Full artifact contents

    Returns:
        Decoded node ids and edge pairs

    Raises:
        CompactFormatError: On an unknown tag or a truncated final record
    """
    graph = CompactGraph()
    pos = 0
    size = len(data)

    while pos < size:
        tag = data[pos]
        if tag == NODE_TAG:
            record_type = NODE_RECORD
        elif tag == EDGE_TAG:
            record_type = EDGE_RECORD
        else:
            raise CompactFormatError(f"Unknown record tag 0x{tag:02x} at offset {pos}")

        if pos + record_type.itemsize > size:
            raise CompactFormatError(f"Truncated record at offset {pos}")

        record = np.frombuffer(data, dtype=record_type, count=1, offset=pos)[0]
        if tag == NODE_TAG:
            graph.node_ids.append(int(record["id"]))
        else:
            graph.edges.append((int(record["source"]), int(record["target"])))
        pos += record_type.itemsize

    return graph


def load_compact_binary(filepath: str | Path) -> CompactGraph:
    """Read and decode a compact binary artifact from disk."""
    with open(filepath, "rb") as f:
        return read_compact_binary(f.read())
