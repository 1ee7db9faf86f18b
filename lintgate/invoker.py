"""Run the analyzer as a one-shot subprocess and decode its JSON report."""

import asyncio
import json
import logging

from lintgate import errors, linting

LOGGER = logging.getLogger(__name__)

# The analyzer exits 1 when it reports findings; anything above is a crash.
_OK_EXIT_CODES = frozenset({0, 1})


def build_argv(document: linting.Document, options: linting.Options) -> list[str]:
    """Return the argv that lints *document* read from stdin."""
    argv = [
        *options.command,
        "--format",
        "json",
        "--stdin",
        "--stdin-filename",
        document.path,
    ]
    if options.fix:
        argv.append("--fix-dry-run")
    return argv


class SubprocessInvoker:
    """Feeds the document text to the analyzer over stdin."""

    async def invoke(
        self, document: linting.Document, options: linting.Options
    ) -> object:
        """Run the analyzer and return its decoded, unvalidated report.

        Raises:
            InvocationError: If the process cannot start, times out, crashes,
                or writes something other than JSON.
        """
        argv = build_argv(document, options)
        LOGGER.debug("Running %s", argv)
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=options.cwd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise errors.InvocationError(f"Could not start linter: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(document.text.encode("utf-8")),
                timeout=options.timeout,
            )
        except TimeoutError:
            process.kill()
            await process.wait()
            msg = f"Linter timed out after {options.timeout}s"
            raise errors.InvocationError(msg) from None

        if process.returncode not in _OK_EXIT_CODES:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise errors.InvocationError(
                detail or f"Linter exited with code {process.returncode}"
            )
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise errors.InvocationError("Linter produced unreadable output") from exc
