"""Sequence the lint and fix pipelines over injected collaborators."""

import dataclasses
import logging
import typing

from lintgate import classifier as failure_classifier
from lintgate import diagnostics, errors, report

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Document:
    """A snapshot of the text buffer being linted."""

    path: str
    text: str


@dataclasses.dataclass(frozen=True)
class Options:
    """Resolved analyzer settings for one document.

    Attributes:
        command: Argv prefix that runs the analyzer.
        cwd: Directory the analyzer runs in (the project root).
        config_file: The analyzer config file that applies to the document.
        timeout: Seconds before the invocation layer gives up.
        fix: Ask the analyzer for the fully-fixed output text.
    """

    command: tuple[str, ...]
    cwd: str | None = None
    config_file: str | None = None
    timeout: float | None = None
    fix: bool = False


class PermissionGate(typing.Protocol):
    """Decides whether the analyzer may run for a document."""

    async def check_permission(self, document: Document) -> bool: ...


class IgnorePolicy(typing.Protocol):
    """Excludes paths from linting. May be sync or async."""

    def is_ignored(self, path: str) -> bool | typing.Awaitable[bool]: ...


class OptionsResolver(typing.Protocol):
    """Finds the analyzer settings that apply to a document.

    Raises MissingLinterError or MissingPackageError when the document has
    nothing to be linted with.
    """

    async def resolve_options(self, document: Document) -> Options: ...


class Invoker(typing.Protocol):
    """Runs the analyzer and returns its raw, unvalidated report."""

    async def invoke(self, document: Document, options: Options) -> object: ...


class Linter:
    """Runs documents through ignore, permission, options, invocation, validation.

    Neither ``lint`` nor ``fix`` raises: every failure resolves to the empty
    value, after being suppressed or handed to ``report_error``.
    """

    def __init__(
        self,
        *,
        permission_gate: PermissionGate,
        ignore_policy: IgnorePolicy,
        options_resolver: OptionsResolver,
        invoker: Invoker,
    ) -> None:
        """Initialize with the four collaborators the pipeline delegates to."""
        self.permission_gate = permission_gate
        self.ignore_policy = ignore_policy
        self.options_resolver = options_resolver
        self.invoker = invoker

    async def _resolve_options(
        self,
        document: Document,
        fix: bool,  # noqa: FBT001
    ) -> Options:
        options = await self.options_resolver.resolve_options(document)
        return dataclasses.replace(options, fix=True) if fix else options

    async def _run(
        self,
        document: Document,
        classifier: failure_classifier.FailureClassifier,
        *,
        fix: bool,
    ) -> report.RawFileResult | None:
        """Run the shared pipeline prefix; None means "nothing to return"."""
        ignored = await classifier.call(self.ignore_policy.is_ignored, document.path)
        if ignored.failed or ignored.value:
            LOGGER.debug("Skipping ignored file %s", document.path)
            return None

        allowed = await classifier.call(
            self.permission_gate.check_permission, document
        )
        if allowed.failed or not allowed.value:
            LOGGER.debug("No permission to lint %s", document.path)
            return None

        resolved = await classifier.call(self._resolve_options, document, fix)
        if resolved.failed:
            return None

        invoked = await classifier.call(self.invoker.invoke, document, resolved.value)
        if invoked.failed:
            return None

        try:
            return report.validate_report(invoked.value)
        except errors.InvalidReportError as error:
            classifier.handle(error)
            return None

    async def lint(
        self,
        document: Document,
        report_error: failure_classifier.ReportError | None = None,
    ) -> list[diagnostics.Diagnostic]:
        """Lint *document* and return its diagnostics in analyzer order.

        Args:
            document: The text buffer snapshot to lint.
            report_error: Optional sink for failures that must be surfaced.

        Returns:
            One Diagnostic per analyzer message, or an empty list when the
            file is ignored, not permitted, or linting failed.
        """
        classifier = failure_classifier.FailureClassifier(report_error)
        result = await self._run(document, classifier, fix=False)
        if result is None:
            return []
        return [
            diagnostics.normalize(message, document.text, document.path)
            for message in result.messages
        ]

    async def fix(
        self,
        document: Document,
        report_error: failure_classifier.ReportError | None = None,
    ) -> str | None:
        """Return the fully-fixed text of *document*, or None.

        None covers both "no fixes were applicable" and every failure path.
        """
        classifier = failure_classifier.FailureClassifier(report_error)
        result = await self._run(document, classifier, fix=True)
        if result is None:
            return None
        return result.output
