"""Exceptions raised while building and exporting the cross-reference graph."""


class SeqGraphError(Exception):
    """Base class for all seqgraph errors."""


class CorpusReadError(SeqGraphError):
    """Raised when the corpus or one of its documents cannot be read as text."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path}: {reason}")


class LabelParseError(SeqGraphError, ValueError):
    """Raised when a label has no valid unsigned 32-bit numeric suffix."""

    def __init__(self, label: str, reason: str):
        self.label = label
        self.reason = reason
        super().__init__(f"Could not parse label {label!r}: {reason}")


class CompactFormatError(SeqGraphError, ValueError):
    """Raised when a compact binary stream is malformed."""
