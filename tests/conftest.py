import tempfile
from pathlib import Path
from typing import Generator

import pytest

from seqgraph.domain.label import Label
from seqgraph.graph.store import InternedGraph


@pytest.fixture
def temp_base() -> Generator[Path, None, None]:
    """Temporary directory holding a corpus and the artifacts written from it."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def corpus_directory(temp_base: Path) -> Path:
    """Create an empty corpus directory."""
    corpus_dir = temp_base / "seq"
    corpus_dir.mkdir()
    return corpus_dir


@pytest.fixture
def output_directory(temp_base: Path) -> Path:
    """Create the directory artifacts are written to."""
    output_dir = temp_base / "artifacts"
    output_dir.mkdir()
    return output_dir


@pytest.fixture
def scenario_corpus(corpus_directory: Path) -> Path:
    """Two documents, the first mentioning the second twice."""
    (corpus_directory / "A000001.seq").write_text("Compare A000002 and A000002.")
    (corpus_directory / "A000002.seq").write_text("No related sequences.")
    return corpus_directory


@pytest.fixture
def scenario_graph() -> InternedGraph:
    """Graph equal to what scanning the scenario corpus produces."""
    graph = InternedGraph()
    graph.get_or_create(Label(text="A000001"))
    graph.add_edge(Label(text="A000001"), Label(text="A000002"))
    graph.add_edge(Label(text="A000001"), Label(text="A000002"))
    graph.get_or_create(Label(text="A000002"))
    return graph
