"""Normalized diagnostics and the mapping from raw analyzer messages."""

import dataclasses
import enum

from lintgate import positions, report

_ADVISORY_SEVERITY = 1


class Severity(enum.Enum):
    """Display severity of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"


@dataclasses.dataclass(frozen=True)
class Solution:
    """A text edit that resolves a diagnostic."""

    position: positions.Span
    replace_with: str

    def to_dict(self) -> dict[str, object]:
        """Render the editor wire shape."""
        return {
            "position": [list(point) for point in self.position],
            "replaceWith": self.replace_with,
        }


@dataclasses.dataclass(frozen=True)
class Location:
    """Where a diagnostic applies."""

    file: str
    position: positions.Span


@dataclasses.dataclass(frozen=True)
class Diagnostic:
    """A single normalized finding, ready for display.

    ``solutions`` is ``None`` when the analyzer offered no fix, which is
    distinct from a fix list that happens to be empty.
    """

    severity: Severity
    excerpt: str
    location: Location
    solutions: list[Solution] | None = None
    rule_id: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Render the editor wire shape, omitting ``solutions`` when absent."""
        rendered: dict[str, object] = {
            "severity": self.severity.value,
            "excerpt": self.excerpt,
            "location": {
                "file": self.location.file,
                "position": [list(point) for point in self.location.position],
            },
        }
        if self.solutions is not None:
            rendered["solutions"] = [solution.to_dict() for solution in self.solutions]
        return rendered


def map_severity(raw: object) -> Severity:
    """Return WARNING for advisory findings and ERROR for everything else."""
    if raw == _ADVISORY_SEVERITY and not isinstance(raw, bool):
        return Severity.WARNING
    return Severity.ERROR


def _token_end(source: str, start_col: int) -> int:
    """Return the column where the non-whitespace run at *start_col* ends."""
    end = max(start_col, 0)
    while end < len(source) and not source[end].isspace():
        end += 1
    return min(end, len(source))


def _position(message: report.RawMessage, text: str) -> positions.Span:
    if message.source is not None and message.column is not None:
        start = positions.from_line_column(text, message.line or 1, message.column)
        end_col = _token_end(message.source, start[1])
        # Clamped to the live line; the fragment may be stale.
        end = positions.from_line_column(text, start[0] + 1, end_col + 1)
        return (start, max(start, end))
    if message.line is not None and message.column is not None:
        start = positions.from_line_column(text, message.line, message.column)
        if message.end_line is None or message.end_column is None:
            return (start, start)
        end = positions.from_line_column(text, message.end_line, message.end_column)
        return (start, max(start, end))
    return (positions.ORIGIN, positions.ORIGIN)


def _solutions(message: report.RawMessage, text: str) -> list[Solution] | None:
    if message.fix is None:
        return None
    start, end = message.fix.range
    return [
        Solution(
            position=positions.span_from_offsets(text, start, end),
            replace_with=message.fix.replacement,
        )
    ]


def normalize(message: report.RawMessage, text: str, path: str) -> Diagnostic:
    """Map one raw analyzer message onto a Diagnostic.

    Args:
        message: The raw finding.
        text: The live content of the document the finding refers to.
        path: The document's file path.

    Returns:
        A Diagnostic whose position is always a well-formed range; messages
        without positional data land at the document origin.
    """
    return Diagnostic(
        severity=map_severity(message.severity),
        excerpt=message.message,
        location=Location(file=path, position=_position(message, text)),
        solutions=_solutions(message, text),
        rule_id=message.rule_id,
    )
