"""Error taxonomy shared by the pipeline and its collaborators."""

import enum


class ErrorKind(enum.Enum):
    """Classification tag carried by every lintgate error."""

    MISSING_LINTER = "missing-linter"
    MISSING_PACKAGE = "missing-package"
    INVALID_REPORT = "invalid-report"
    GENERIC = "generic"


# Expected configuration absence: treated as "no findings", never reported.
SUPPRESSIBLE_KINDS: frozenset[ErrorKind] = frozenset(
    {ErrorKind.MISSING_LINTER, ErrorKind.MISSING_PACKAGE}
)


class LintGateError(Exception):
    """Base class for errors raised by lintgate and its collaborators."""

    kind: ErrorKind = ErrorKind.GENERIC
    default_message: str = ""

    def __init__(self, message: str | None = None) -> None:
        """Initialize with *message*, falling back to the class default."""
        super().__init__(self.default_message if message is None else message)


class MissingLinterError(LintGateError):
    """No analyzer configuration applies to the file."""

    kind = ErrorKind.MISSING_LINTER
    default_message = "No linter configuration found for this file"


class MissingPackageError(LintGateError):
    """The analyzer or a package it needs is not installed."""

    kind = ErrorKind.MISSING_PACKAGE
    default_message = "A required linter package is not installed"


class InvalidReportError(LintGateError):
    """The analyzer returned output of an unexpected shape."""

    kind = ErrorKind.INVALID_REPORT
    default_message = "Invalid lint report"


class InvocationError(LintGateError):
    """The analyzer process failed, timed out, or emitted unreadable output."""


def error_kind(error: BaseException) -> ErrorKind:
    """Return the classification tag of *error*.

    Any object exposing an ``ErrorKind`` as ``kind`` is classified by that
    value; everything else is ``GENERIC``.
    """
    kind = getattr(error, "kind", None)
    return kind if isinstance(kind, ErrorKind) else ErrorKind.GENERIC


def is_suppressible(error: BaseException) -> bool:
    """Return True if *error* means "nothing to report" rather than a failure."""
    return error_kind(error) in SUPPRESSIBLE_KINDS
