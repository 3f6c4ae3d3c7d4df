"""Artifact writers for the finished cross-reference graph."""

from seqgraph.exporters.base import GraphExporter
from seqgraph.exporters.compact_binary import CompactBinaryExporter
from seqgraph.exporters.graphml import GraphMLExporter

__all__ = [
    "CompactBinaryExporter",
    "GraphExporter",
    "GraphMLExporter",
]
