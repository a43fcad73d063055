"""Split byline blocks into candidate sub-segments for classification."""

from typing import List

# Single-character delimiters seen between byline fields.
SEGMENT_DELIMITERS = ("|", "/", "•", "·")

# Spaced dash variants (hyphen, en dash, em dash).
SEGMENT_SEPARATORS = (" - ", " – ", " — ")


def split_candidate_segments(text: str) -> List[str]:
    """
    Return every line of ``text`` followed by its delimiter-split pieces.

    Each delimiter is applied to the whole line independently, so
    ``"A | B / C"`` yields the line, ``["A ", " B / C"]`` for the pipe and
    ``["A | B ", " C"]`` for the slash, never a cross-product of both.
    Pieces are not trimmed; classifiers trim for themselves.
    """
    segments: List[str] = []

    for line in text.split("\n"):
        segments.append(line)
        for delimiter in SEGMENT_DELIMITERS:
            if delimiter in line:
                segments.extend(line.split(delimiter))
        for separator in SEGMENT_SEPARATORS:
            if separator in line:
                segments.extend(line.split(separator))

    return segments
