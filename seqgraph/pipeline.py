"""Batch pipeline: scan the corpus, then write each artifact in turn."""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from seqgraph.domain.graph import ExportStats
from seqgraph.exporters.base import GraphExporter
from seqgraph.graph.store import InternedGraph
from seqgraph.ingestion.scanner import CorpusScanner

logger = logging.getLogger(__name__)


class PipelineResult(BaseModel):
    """Outcome of one pipeline run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    graph: InternedGraph
    artifacts: list[ExportStats] = []


class GraphBuildPipeline:
    """Runs scanning and every export strictly one after another."""

    def __init__(
        self,
        *,
        scanner: CorpusScanner,
        exporters: list[tuple[GraphExporter, Path]],
    ):
        """Initialize the pipeline.

        Args:
            scanner: Scanner building the graph from the corpus
            exporters: Exporters paired with their artifact paths, run in this order
        """
        self.scanner = scanner
        self.exporters = exporters

    def run(self, corpus_root: Path) -> PipelineResult:
        """Build the graph from the corpus and write all artifacts.

        Any error aborts the run immediately; artifacts already written by
        earlier exporters are left in place.

        Args:
            corpus_root: Directory holding one file per entity

        Returns:
            The built graph and the stats of every artifact written
        """
        logger.info(f"Building graph from {corpus_root}...")
        graph = self.scanner.scan(corpus_root)

        artifacts = []
        for exporter, path in self.exporters:
            artifacts.append(exporter.export(graph, path))

        logger.info("Done building graph!")
        return PipelineResult(graph=graph, artifacts=artifacts)
