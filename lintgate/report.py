"""Raw analyzer report model and shape validation."""

import collections.abc
import dataclasses

from lintgate import errors


@dataclasses.dataclass(frozen=True)
class RawFix:
    """An edit proposed by the analyzer, addressed by character offsets."""

    range: tuple[int, int]
    replacement: str


@dataclasses.dataclass(frozen=True)
class RawMessage:
    """One analyzer finding.

    Only ``message`` is guaranteed; every other field may be absent. Lines and
    columns are 1-based, as the analyzer reports them.
    """

    message: str
    severity: object = None
    rule_id: str | None = None
    line: int | None = None
    column: int | None = None
    end_line: int | None = None
    end_column: int | None = None
    source: str | None = None
    fix: RawFix | None = None


@dataclasses.dataclass(frozen=True)
class RawFileResult:
    """The analyzer's findings for a single file."""

    file_path: str | None
    messages: list[RawMessage]
    output: str | None = None


def _is_sequence(value: object) -> bool:
    return isinstance(value, collections.abc.Sequence) and not isinstance(
        value, str | bytes
    )


def _optional_int(value: object) -> int | None:
    # bool is an int subclass but never a valid locator.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _parse_fix(raw: object) -> RawFix | None:
    """Return the fix described by *raw*, or None if it is absent or malformed."""
    if not isinstance(raw, collections.abc.Mapping):
        return None
    span = raw.get("range")
    replacement = raw.get("text", raw.get("replacement"))
    if not _is_sequence(span) or len(span) != 2:  # noqa: PLR2004
        return None
    start, end = (_optional_int(bound) for bound in span)
    if start is None or end is None or not isinstance(replacement, str):
        return None
    return RawFix(range=(start, end), replacement=replacement)


def _parse_message(raw: object) -> RawMessage:
    if not isinstance(raw, collections.abc.Mapping):
        raise errors.InvalidReportError
    text = raw.get("message")
    if not isinstance(text, str):
        raise errors.InvalidReportError
    return RawMessage(
        message=text,
        severity=raw.get("severity"),
        rule_id=_optional_str(raw.get("ruleId")),
        line=_optional_int(raw.get("line")),
        column=_optional_int(raw.get("column")),
        end_line=_optional_int(raw.get("endLine")),
        end_column=_optional_int(raw.get("endColumn")),
        source=_optional_str(raw.get("source")),
        fix=_parse_fix(raw.get("fix")),
    )


def validate_report(raw: object) -> RawFileResult:
    """Check the shape of a single-file analyzer report and parse it.

    Args:
        raw: The unvalidated value returned by the invocation layer.

    Returns:
        The one per-file result the report must contain.

    Raises:
        InvalidReportError: If *raw* is not a sequence of exactly one
            per-file result, or that result lacks its required fields.
    """
    if not isinstance(raw, list | tuple) or len(raw) != 1:
        raise errors.InvalidReportError
    entry = raw[0]
    if not isinstance(entry, collections.abc.Mapping):
        raise errors.InvalidReportError
    messages = entry.get("messages")
    output = entry.get("output")
    if not _is_sequence(messages):
        raise errors.InvalidReportError
    if output is not None and not isinstance(output, str):
        raise errors.InvalidReportError
    return RawFileResult(
        file_path=_optional_str(entry.get("filePath")),
        messages=[_parse_message(message) for message in messages],
        output=output,
    )
