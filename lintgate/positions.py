"""Map analyzer locators onto zero-based (row, column) document coordinates."""

Point = tuple[int, int]
Span = tuple[Point, Point]

ORIGIN: Point = (0, 0)


def from_line_column(text: str, line: int, column: int) -> Point:
    """Convert a 1-based line/column pair into a zero-based point in *text*.

    Locators outside the document clamp to the nearest valid coordinate:
    rows to the first or last line, columns to ``[0, len(line)]``.
    """
    lines = text.split("\n")
    row = min(max(line - 1, 0), len(lines) - 1)
    col = min(max(column - 1, 0), len(lines[row]))
    return (row, col)


def from_offset(text: str, offset: int) -> Point:
    """Convert an absolute character offset into a zero-based point in *text*."""
    offset = min(max(offset, 0), len(text))
    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return (row, offset - line_start)


def utf16_to_index(text: str, offset: int) -> int:
    """Convert an offset counted in UTF-16 code units into an index into *text*.

    The analyzer counts characters outside the Basic Multilingual Plane as two
    units; Python counts them as one.
    """
    units = 0
    for index, char in enumerate(text):
        if units >= offset:
            return index
        units += 2 if ord(char) > 0xFFFF else 1  # noqa: PLR2004
    return len(text)


def span_from_offsets(text: str, start: int, end: int) -> Span:
    """Return the span covering the ``[start, end)`` range of *text*.

    Offsets are UTF-16 code units, as the analyzer reports them.
    """
    return (
        from_offset(text, utf16_to_index(text, start)),
        from_offset(text, utf16_to_index(text, end)),
    )
