"""Label domain model and its numeric representation."""

import re

from pydantic import BaseModel, ConfigDict

from seqgraph.errors import LabelParseError

U32_MAX = 2**32 - 1

_DIGITS = re.compile(r"[0-9]+")


class Label(BaseModel):
    """Textual identifier of one entity in the corpus, e.g. ``A000045``.

    Two labels are the same entity iff their text is identical. The format
    (one prefix character followed by decimal digits) is only enforced when
    the label is turned into its numeric representation.

    Attributes:
        text: The label exactly as it appeared in a file name or document
    """

    model_config = ConfigDict(frozen=True)

    text: str

    def __str__(self) -> str:
        return self.text


def represent(label: Label) -> int:
    """Convert a label into the unsigned 32-bit integer persisted in binary exports.

    The prefix character is dropped and the remaining digits are parsed as base 10.
    This value depends only on the label text, never on traversal order.

    Args:
        label: Label to convert

    Returns:
        Integer in the range 0..2**32-1

    Raises:
        LabelParseError: If the suffix is empty, not all ASCII digits, or out of range
    """
    suffix = label.text[1:]
    if not suffix:
        raise LabelParseError(label.text, "no digits after prefix")
    if not _DIGITS.fullmatch(suffix):
        raise LabelParseError(label.text, "suffix is not a decimal number")

    value = int(suffix)
    if value > U32_MAX:
        raise LabelParseError(label.text, "value does not fit in 32 bits")
    return value
