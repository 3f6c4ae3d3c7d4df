"""Tests for the compact binary exporter and reader."""

import os
import stat
from collections import Counter
from pathlib import Path

import pytest

from seqgraph.domain.label import Label
from seqgraph.errors import CompactFormatError, LabelParseError
from seqgraph.exporters.compact_binary import (
    EDGE_RECORD,
    NODE_RECORD,
    CompactBinaryExporter,
    load_compact_binary,
    read_compact_binary,
)
from seqgraph.graph.store import InternedGraph


def make_graph(edges: list[tuple[str, str]], nodes: list[str] | None = None) -> InternedGraph:
    graph = InternedGraph()
    for text in nodes or []:
        graph.get_or_create(Label(text=text))
    for source, target in edges:
        graph.add_edge(Label(text=source), Label(text=target))
    return graph


def test_record_sizes() -> None:
    """Test that the numpy record layouts are packed."""
    assert NODE_RECORD.itemsize == 6
    assert EDGE_RECORD.itemsize == 10


def test_scenario_bytes(scenario_graph: InternedGraph, output_directory: Path) -> None:
    """Test the exact bytes written for the two-document scenario."""
    output = output_directory / "output.bin"

    stats = CompactBinaryExporter().export(scenario_graph, output)

    expected = (
        b"\x01\x01\x00\x00\x00\x0a"
        b"\x01\x02\x00\x00\x00\x0a"
        b"\x00\x01\x00\x00\x00\x02\x00\x00\x00\x0a"
        b"\x00\x01\x00\x00\x00\x02\x00\x00\x00\x0a"
    )
    assert output.read_bytes() == expected
    assert stats.bytes_written == 32
    assert (stats.nodes, stats.edges) == (2, 2)


def test_size_law(output_directory: Path) -> None:
    """Test that file size is 6 bytes per node plus 10 bytes per edge."""
    graph = make_graph(
        [("A000001", "A000002"), ("A000002", "A000003"), ("A000003", "A000003")],
        nodes=["A000010", "A000011"],
    )
    output = output_directory / "output.bin"

    CompactBinaryExporter().export(graph, output)

    assert output.stat().st_size == 6 * graph.node_count + 10 * graph.edge_count == 60


def test_empty_graph(output_directory: Path) -> None:
    """Test that an empty graph produces an empty artifact."""
    output = output_directory / "output.bin"

    stats = CompactBinaryExporter().export(InternedGraph(), output)

    assert output.read_bytes() == b""
    assert stats.bytes_written == 0


def test_round_trip(output_directory: Path) -> None:
    """Test that decoding reproduces the written node ids and edge multiset."""
    graph = make_graph(
        [
            ("A000045", "A000032"),
            ("A000045", "A000032"),
            ("A000032", "A000045"),
            ("A000001", "A000001"),
        ]
    )
    output = output_directory / "output.bin"

    CompactBinaryExporter().export(graph, output)
    decoded = load_compact_binary(output)

    assert decoded.node_ids == [45, 32, 1]
    assert Counter(decoded.edges) == Counter({(45, 32): 2, (32, 45): 1, (1, 1): 1})


def test_payload_bytes_equal_to_terminator(output_directory: Path) -> None:
    """Test decoding when payload bytes collide with the 0x0A terminator."""
    # 10 == 0x0A and 266 == 0x010A
    graph = make_graph([("A000010", "A000266"), ("A002570", "A000010")])
    output = output_directory / "output.bin"

    CompactBinaryExporter().export(graph, output)
    data = output.read_bytes()
    decoded = read_compact_binary(data)

    assert data.count(b"\x0a") > graph.node_count + graph.edge_count
    assert decoded.node_ids == [10, 266, 2570]
    assert decoded.edges == [(10, 266), (2570, 10)]


def test_stale_longer_artifact_is_truncated(
    scenario_graph: InternedGraph, output_directory: Path
) -> None:
    """Test that a previous, longer artifact leaves no trailing bytes."""
    output = output_directory / "output.bin"
    output.write_bytes(b"\xee" * 1000)

    CompactBinaryExporter().export(scenario_graph, output)

    assert output.stat().st_size == 32
    assert read_compact_binary(output.read_bytes()).node_ids == [1, 2]


def test_no_temporary_files_left(scenario_graph: InternedGraph, output_directory: Path) -> None:
    """Test that only the artifact remains after a successful export."""
    CompactBinaryExporter().export(scenario_graph, output_directory / "output.bin")

    assert [p.name for p in output_directory.iterdir()] == ["output.bin"]


def test_creates_missing_parent_directories(
    scenario_graph: InternedGraph, output_directory: Path
) -> None:
    """Test that the artifact path is created if absent."""
    output = output_directory / "nested" / "output.bin"

    CompactBinaryExporter().export(scenario_graph, output)

    assert output.exists()


def test_malformed_label_aborts(output_directory: Path) -> None:
    """Test that by default a malformed label aborts without touching the artifact."""
    graph = make_graph([("A000001", "A000002")], nodes=["README"])
    output = output_directory / "output.bin"
    output.write_bytes(b"previous run")

    with pytest.raises(LabelParseError) as exc_info:
        CompactBinaryExporter().export(graph, output)

    assert exc_info.value.label == "README"
    assert output.read_bytes() == b"previous run", "Failed export must not replace the artifact"
    assert [p.name for p in output_directory.iterdir()] == ["output.bin"]


def test_malformed_label_skipped(output_directory: Path) -> None:
    """Test that the skip policy drops the node and every edge touching it."""
    graph = make_graph(
        [("A000001", "README"), ("A000001", "A000002"), ("README", "A000002")],
    )
    output = output_directory / "output.bin"

    stats = CompactBinaryExporter(on_malformed="skip").export(graph, output)
    decoded = load_compact_binary(output)

    assert stats.skipped_labels == ["README"]
    assert (stats.nodes, stats.edges) == (2, 1)
    assert output.stat().st_size == 6 * 2 + 10 * 1
    assert decoded.node_ids == [1, 2]
    assert decoded.edges == [(1, 2)]


def test_reader_rejects_unknown_tag() -> None:
    """Test that an unknown tag byte is a format error."""
    with pytest.raises(CompactFormatError, match="Unknown record tag 0x02 at offset 6"):
        read_compact_binary(b"\x01\x01\x00\x00\x00\x0a\x02\x00")


def test_reader_rejects_truncated_record() -> None:
    """Test that a record cut short is a format error."""
    with pytest.raises(CompactFormatError, match="Truncated record at offset 0"):
        read_compact_binary(b"\x00\x01\x00\x00\x00\x02")


def test_artifact_permissions_follow_umask(
    scenario_graph: InternedGraph, output_directory: Path
) -> None:
    """Test that the artifact gets the usual 0666-minus-umask permissions."""
    output = output_directory / "output.bin"
    previous = os.umask(0o022)
    try:
        CompactBinaryExporter().export(scenario_graph, output)
    finally:
        os.umask(previous)

    assert stat.S_IMODE(output.stat().st_mode) == 0o644, "Artifact should be world-readable"
