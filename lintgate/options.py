"""Resolve analyzer settings for a document from the filesystem."""

from __future__ import annotations

import os
import pathlib
import shutil

from lintgate import errors, linting


def _find_config(
    start: pathlib.Path, config_files: tuple[str, ...]
) -> pathlib.Path | None:
    """Walk up from *start* to find the nearest analyzer config file."""
    for directory in [start, *start.parents]:
        for name in config_files:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def _find_executable(name: str, project_dir: pathlib.Path) -> str | None:
    """Locate *name* in a project-local ``node_modules/.bin``, then on PATH.

    Names that already contain a path separator are only checked as given.
    """
    if os.sep in name or (os.altsep and os.altsep in name):
        return name if pathlib.Path(name).is_file() else None
    for directory in [project_dir, *project_dir.parents]:
        local = directory / "node_modules" / ".bin" / name
        if local.is_file():
            return str(local)
    return shutil.which(name)


class ConfigOptionsResolver:
    """Finds the analyzer config and executable that apply to a document."""

    def __init__(
        self,
        *,
        executable: tuple[str, ...],
        config_files: tuple[str, ...],
        timeout: float | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            executable: Argv prefix for the analyzer; the first item is looked
                up in ``node_modules/.bin`` and on PATH.
            config_files: Config file names that make a directory lintable.
            timeout: Seconds allowed for each analyzer run.
        """
        self.executable = executable
        self.config_files = config_files
        self.timeout = timeout

    async def resolve_options(self, document: linting.Document) -> linting.Options:
        """Return the Options for *document*.

        Raises:
            MissingLinterError: If no config file applies to the document.
            MissingPackageError: If the analyzer executable cannot be found.
        """
        config_file = _find_config(
            pathlib.Path(document.path).resolve().parent, self.config_files
        )
        if config_file is None:
            raise errors.MissingLinterError
        name, *rest = self.executable
        found = _find_executable(name, config_file.parent)
        if found is None:
            raise errors.MissingPackageError(f"Could not find `{name}`")
        return linting.Options(
            command=(found, *rest),
            cwd=str(config_file.parent),
            config_file=str(config_file),
            timeout=self.timeout,
        )
