"""Absorb collaborator failures: suppress the expected ones, report the rest."""

import collections.abc
import dataclasses
import inspect
import logging
import typing

from lintgate import errors

LOGGER = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Unknown error while running the linter"

ReportError = collections.abc.Callable[[BaseException], None]

T = typing.TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Outcome(typing.Generic[T]):
    """Result of a classified call: a value, or a marker that it failed."""

    value: T | None = None
    failed: bool = False


def describe(error: BaseException) -> str:
    """Return a non-blank human-readable description of *error*."""
    message = str(error).strip()
    if message:
        return message
    notes = getattr(error, "__notes__", None) or []
    return next((note for note in notes if note.strip()), DEFAULT_DESCRIPTION)


class FailureClassifier:
    """Wraps collaborator calls so that no failure escapes the pipeline."""

    def __init__(self, report_error: ReportError | None = None) -> None:
        """Initialize with an optional sink for non-suppressed failures.

        Args:
            report_error: Called with each failure that must be surfaced. When
                omitted, such failures are only logged.
        """
        self.report_error = report_error

    def handle(self, error: BaseException) -> None:
        """Classify *error*, reporting it unless it is suppressible."""
        kind = errors.error_kind(error)
        if kind in errors.SUPPRESSIBLE_KINDS:
            LOGGER.debug("Suppressed %s: %s", kind.value, error)
            return
        if not str(error).strip():
            error.add_note(DEFAULT_DESCRIPTION)
        LOGGER.warning("Linting failed (%s): %s", kind.value, describe(error))
        if self.report_error is None:
            return
        try:
            self.report_error(error)
        except Exception:
            LOGGER.exception("Error reporter raised while reporting %r", error)

    async def call(
        self,
        func: collections.abc.Callable[..., typing.Any],
        *args: typing.Any,
    ) -> Outcome[typing.Any]:
        """Call *func* with *args*, awaiting the result if it is awaitable.

        Returns:
            ``Outcome(value)`` on success, ``Outcome(failed=True)`` once the
            failure has been classified.
        """
        try:
            result = func(*args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as error:  # noqa: BLE001
            self.handle(error)
            return Outcome(failed=True)
        return Outcome(value=result)
