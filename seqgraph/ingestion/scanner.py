"""Corpus scanning: turns each document into one node and its outgoing edges."""

from pathlib import Path
from typing import Iterator

from loguru import logger

from seqgraph.domain.label import Label
from seqgraph.errors import CorpusReadError
from seqgraph.graph.store import InternedGraph

from .reference_extractor import DEFAULT_REFERENCE_PATTERN, ReferenceExtractor


class CorpusScanner:
    """Walks a corpus directory and feeds labels and references into an interning store."""

    def __init__(
        self,
        *,
        reference_pattern: str = DEFAULT_REFERENCE_PATTERN,
        progress_interval: int = 10_000,
        encoding: str = "utf-8",
    ):
        """Initialize the scanner.

        Args:
            reference_pattern: Regular expression matching one referenced label
            progress_interval: Log progress every this many documents
            encoding: Text encoding of the documents
        """
        self.extractor = ReferenceExtractor(reference_pattern)
        self.progress_interval = progress_interval
        self.encoding = encoding

    def scan(self, corpus_root: Path, graph: InternedGraph | None = None) -> InternedGraph:
        """Scan every regular file under the corpus root.

        Any unreadable or undecodable document aborts the scan.

        Args:
            corpus_root: Directory holding one file per entity
            graph: Store to add to. A fresh one is created if not given.

        Returns:
            The populated graph

        Raises:
            CorpusReadError: If the root is not a directory or a document cannot be read
        """
        corpus_root = Path(corpus_root)
        if not corpus_root.is_dir():
            raise CorpusReadError(str(corpus_root), "not a directory")

        graph = graph if graph is not None else InternedGraph()

        count = 0
        for file in self._iter_documents(corpus_root):
            self.scan_document(file, graph)
            count += 1
            if self.progress_interval and count % self.progress_interval == 0:
                logger.info(f"Parsed {count} documents...")

        logger.info(
            f"Scanned {count} documents: {graph.node_count} nodes, {graph.edge_count} edges"
        )
        return graph

    def scan_document(self, file: Path, graph: InternedGraph) -> Label:
        """Register one document and the references found in it.

        Args:
            file: Document to scan
            graph: Store receiving the node and its edges

        Returns:
            The document's label
        """
        label = self.label_for(file)
        graph.get_or_create(label)

        try:
            content = file.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise CorpusReadError(str(file), f"not valid {self.encoding} text") from e
        except OSError as e:
            raise CorpusReadError(str(file), str(e)) from e

        references = self.extractor.extract_references(content)
        for target in references:
            graph.add_edge(label, target)

        logger.debug(f"{label}: {len(references)} references")
        return label

    @staticmethod
    def label_for(file: Path) -> Label:
        """Derive a document's label from its base name with the extension stripped."""
        return Label(text=file.stem)

    @staticmethod
    def _iter_documents(corpus_root: Path) -> Iterator[Path]:
        # Sorted so handle numbering is reproducible on one filesystem.
        for path in sorted(corpus_root.rglob("*")):
            if path.is_file():
                yield path
