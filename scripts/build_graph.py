"""CLI for building the cross-reference graph of a corpus and writing both artifacts"""

import argparse
import logging
import sys
from pathlib import Path

from loguru import logger

from seqgraph.config import settings
from seqgraph.exporters.compact_binary import CompactBinaryExporter
from seqgraph.exporters.graphml import GraphMLExporter
from seqgraph.ingestion.scanner import CorpusScanner
from seqgraph.pipeline import GraphBuildPipeline


def main(
    in_folder: str,
    outfile_binary: str,
    outfile_graphml: str,
) -> None:
    scanner = CorpusScanner(
        reference_pattern=settings.reference_pattern,
        progress_interval=settings.progress_interval,
    )
    pipeline = GraphBuildPipeline(
        scanner=scanner,
        exporters=[
            (
                CompactBinaryExporter(on_malformed=settings.malformed_label_policy),
                Path(outfile_binary),
            ),
            (GraphMLExporter(quality=settings.brotli_quality), Path(outfile_graphml)),
        ],
    )
    result = pipeline.run(Path(in_folder))

    for stats in result.artifacts:
        logger.info(f"{stats.path}: {stats.nodes} nodes, {stats.edges} edges")
        if stats.skipped_labels:
            logger.warning(f"{stats.path}: skipped {len(stats.skipped_labels)} malformed labels")


if __name__ == "__main__":
    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])
    logging.basicConfig(level=settings.log_level)

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--in-folder",
        type=str,
        required=False,
        help="Folder containing one document per entity",
        default=str(settings.corpus_dir),
    )
    parser.add_argument(
        "--outfile-binary",
        type=str,
        required=False,
        help="Compact binary output file",
        default=str(settings.binary_output_path),
    )
    parser.add_argument(
        "--outfile-graphml",
        type=str,
        required=False,
        help="Brotli-compressed GraphML output file",
        default=str(settings.structured_output_path),
    )

    args = parser.parse_args()

    main(
        in_folder=args.in_folder,
        outfile_binary=args.outfile_binary,
        outfile_graphml=args.outfile_graphml,
    )
