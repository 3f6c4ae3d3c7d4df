"""Cross-reference extraction from document text."""

import re
from typing import List

from seqgraph.domain.label import Label

DEFAULT_REFERENCE_PATTERN = r"[A-Z][0-9]{6,}"


class ReferenceExtractor:
    """Finds label mentions inside a document."""

    def __init__(self, pattern: str = DEFAULT_REFERENCE_PATTERN):
        """Initialize the extractor.

        Args:
            pattern: Regular expression matching one label, e.g. ``A000045``
        """
        self.pattern = re.compile(pattern)

    def extract_references(self, content: str) -> List[Label]:
        """Extract every label mentioned in the content.

        Matches are non-overlapping and returned left to right, verbatim and
        with repeats, so ``"A000002 and A000002"`` yields two labels.

        Args:
            content: Full document text

        Returns:
            List of referenced labels in order of appearance
        """
        return [Label(text=match.group(0)) for match in self.pattern.finditer(content)]
