"""Glob-based ignore policy."""

from __future__ import annotations

import fnmatch
import pathlib


def _read_patterns(ignore_path: pathlib.Path) -> list[str]:
    """Return the patterns in an ignore file, skipping blanks and comments."""
    try:
        lines = ignore_path.read_text().splitlines()
    except OSError:
        return []
    return [
        line.strip()
        for line in lines
        if line.strip() and not line.strip().startswith("#")
    ]


def _matches(pattern: str, parts: tuple[str, ...]) -> bool:
    """Return True if *pattern* matches the path made of *parts*.

    A pattern without a slash matches any path component.  A pattern with a
    slash is anchored to the root.  A trailing slash restricts the pattern to
    directories.
    """
    directory_only = pattern.endswith("/")
    pattern = pattern.strip("/")
    anchored = "/" in pattern
    for depth in range(1, len(parts) + 1):
        is_directory = depth < len(parts)
        if directory_only and not is_directory:
            continue
        candidate = "/".join(parts[:depth]) if anchored else parts[depth - 1]
        if fnmatch.fnmatchcase(candidate, pattern):
            return True
    return False


class GlobIgnorePolicy:
    """Excludes paths matching gitignore-style glob patterns.

    Patterns are evaluated in order and the last match wins, so a pattern
    prefixed with ``!`` re-includes paths excluded by an earlier one.
    """

    def __init__(self, root: pathlib.Path, patterns: list[str]) -> None:
        """Initialize with the project *root* and the *patterns* to apply."""
        self.root = root.resolve()
        self.patterns = patterns

    @classmethod
    def from_config(
        cls,
        root: pathlib.Path,
        patterns: tuple[str, ...],
        ignore_file: str | None,
    ) -> GlobIgnorePolicy:
        """Build a policy from configured patterns plus an optional ignore file."""
        combined = list(patterns)
        if ignore_file is not None:
            combined.extend(_read_patterns(root / ignore_file))
        return cls(root, combined)

    def is_ignored(self, path: str) -> bool:
        """Return True if *path* is excluded from linting."""
        resolved = pathlib.Path(path).resolve()
        if not resolved.is_relative_to(self.root):
            return False
        parts = resolved.relative_to(self.root).parts
        ignored = False
        for pattern in self.patterns:
            negated = pattern.startswith("!")
            if _matches(pattern.removeprefix("!"), parts):
                ignored = not negated
        return ignored
