"""Graph domain models."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from seqgraph.domain.label import Label


class Node(BaseModel):
    """A registered label together with the handle it was assigned."""

    model_config = ConfigDict(frozen=True)

    label: Label
    handle: int


class Edge(BaseModel):
    """Directed cross-reference: the source document mentions the target label.

    Identical edges may appear more than once and source may equal target.
    """

    model_config = ConfigDict(frozen=True)

    source: int
    target: int


class ExportStats(BaseModel):
    """Summary of one written artifact.

    Attributes:
        path: Where the artifact was written
        nodes: Number of node records written
        edges: Number of edge records written
        bytes_written: Size of the artifact on disk
        skipped_labels: Labels left out because they had no numeric representation
    """

    path: Path
    nodes: int
    edges: int
    bytes_written: int
    skipped_labels: list[str] = []
