"""Conversions between character offsets and 1-based source positions.

Every diagnostic the validator reports is addressed by (line, column), both
1-based. Regex rules report character offsets into the whole source, and the
parser reports positions that may be missing or out of range; the two helpers
here turn either into a location that exists in the submitted text.
"""

from __future__ import annotations


def offset_to_position(source: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-based (line, column) pair.

    The line is one more than the number of newlines before ``offset``; the
    column is the distance from the start of that line, plus one.

    Args:
        source: Full source text.
        offset: Character offset into ``source`` (0 <= offset <= len(source)).

    Returns:
        Tuple of (line, column).

    Raises:
        ValueError: If offset falls outside the source.

    Example:
        >>> offset_to_position("local a\\nwait(1)", 8)
        (2, 1)
    """
    if offset < 0 or offset > len(source):
        raise ValueError(f"Offset {offset} is outside source of length {len(source)}")

    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def clamp_position(source: str, line: int | None, column: int | None) -> tuple[int, int]:
    """Force a reported position onto a real location in ``source``.

    Missing or non-positive values become 1. The line is capped at the number
    of lines in the source and the column at the length of that line plus one.
    """
    lines = source.split("\n")

    line = line if line and line > 0 else 1
    line = min(line, len(lines))

    column = column if column and column > 0 else 1
    column = min(column, len(lines[line - 1]) + 1)

    return line, column
