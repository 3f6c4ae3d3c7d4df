"""Interning store backing the cross-reference multigraph."""

import threading
from typing import Iterator

from seqgraph.domain.graph import Edge, Node
from seqgraph.domain.label import Label


class InternedGraph:
    """Directed multigraph over labels with a label <-> handle bijection.

    Handles are dense integers handed out in first-seen order, so they are
    always exactly ``0..node_count-1``. Nodes and edges can only be added.
    Both directions of the mapping are private and only change together,
    inside ``get_or_create``.
    """

    def __init__(self) -> None:
        self._handles: dict[Label, int] = {}
        self._labels: list[Label] = []
        self._edges: list[tuple[int, int]] = []
        self._lock = threading.Lock()

    def get_or_create(self, label: Label) -> int:
        """Return the handle of a label, registering it if it has not been seen.

        Args:
            label: Label to intern

        Returns:
            Existing handle, or the next free handle for a new label
        """
        with self._lock:
            return self._intern(label)

    def add_edge(self, source: Label, target: Label) -> tuple[int, int]:
        """Record that the source document mentions the target label.

        Either endpoint is registered as a node if it has not been seen yet, so
        a referenced label without its own document still becomes a node.
        Repeated edges and self-loops are kept as-is.

        Args:
            source: Label of the referencing document
            target: Label found in the document text

        Returns:
            The appended edge as a ``(source, target)`` handle pair
        """
        with self._lock:
            edge = (self._intern(source), self._intern(target))
            self._edges.append(edge)
        return edge

    def _intern(self, label: Label) -> int:
        # Caller holds the lock.
        handle = self._handles.get(label)
        if handle is None:
            handle = len(self._labels)
            self._labels.append(label)
            self._handles[label] = handle
        return handle

    def handle_of(self, label: Label) -> int | None:
        """Get the handle of a registered label, or None if it was never seen."""
        return self._handles.get(label)

    def label_of(self, handle: int) -> Label:
        """Get the label registered under a handle."""
        if not 0 <= handle < len(self._labels):
            raise KeyError(f"Handle {handle} not found")
        return self._labels[handle]

    def nodes(self) -> Iterator[Node]:
        """Iterate nodes in handle order."""
        for handle, label in enumerate(self._labels):
            yield Node(label=label, handle=handle)

    def edges(self) -> Iterator[Edge]:
        """Iterate edges in insertion order."""
        for source, target in self._edges:
            yield Edge(source=source, target=target)

    def labels(self) -> Iterator[Label]:
        """Iterate labels in handle order."""
        yield from self._labels

    def edge_handles(self) -> Iterator[tuple[int, int]]:
        """Iterate edges as ``(source, target)`` handle pairs in insertion order."""
        yield from self._edges

    @property
    def node_count(self) -> int:
        return len(self._labels)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label: object) -> bool:
        return label in self._handles

    def __repr__(self) -> str:
        return f"InternedGraph(nodes={self.node_count}, edges={self.edge_count})"
