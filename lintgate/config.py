"""Load lintgate configuration from pyproject.toml."""

from __future__ import annotations

import dataclasses
import pathlib
import tomllib

from lintgate import ignore, invoker, linting, optin, options

DEFAULT_CONFIG_FILES: tuple[str, ...] = (
    "eslint.config.js",
    "eslint.config.mjs",
    "eslint.config.cjs",
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.yaml",
    ".eslintrc.yml",
    ".eslintrc.json",
    ".eslintrc",
)


@dataclasses.dataclass(frozen=True)
class Config:
    """Resolved lintgate configuration.

    Attributes:
        root: Directory holding the pyproject.toml the config came from, or
            ``None`` when defaults are in use.
        executable: Argv prefix that runs the analyzer.
        config_files: File names whose presence enables linting.
        ignore: Glob patterns excluded from linting.
        ignore_file: Name of a file with extra ignore patterns, one per line.
        timeout: Seconds allowed for one analyzer run.
        require_opt_in: Only lint projects that were explicitly approved.
    """

    root: pathlib.Path | None = None
    executable: tuple[str, ...] = ("eslint",)
    config_files: tuple[str, ...] = DEFAULT_CONFIG_FILES
    ignore: tuple[str, ...] = ()
    ignore_file: str | None = ".eslintignore"
    timeout: float = 10.0
    require_opt_in: bool = False


def _find_pyproject(start: pathlib.Path) -> pathlib.Path | None:
    """Walk up from *start* to find the nearest pyproject.toml."""
    for directory in [start, *start.parents]:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _str_tuple(raw: object, default: tuple[str, ...]) -> tuple[str, ...]:
    """Accept a string or a list of strings; anything else yields *default*."""
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        return tuple(raw)
    return default


def load_config(start: pathlib.Path | None = None) -> Config:
    """Return the Config from the nearest pyproject.toml, or defaults.

    Reads ``[tool.lintgate]`` from the first ``pyproject.toml`` found by
    walking up from *start* (defaults to ``Path.cwd()``).  Returns a default
    Config if no file is found, the file cannot be read, or the section is
    absent.  Values of the wrong type fall back to their defaults.

    Args:
        start: Directory to begin the upward search.  Defaults to cwd.

    Returns:
        The resolved Config.
    """
    search_root = start if start is not None else pathlib.Path.cwd()
    pyproject = _find_pyproject(search_root)
    if pyproject is None:
        return Config()

    try:
        with pyproject.open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError):
        return Config()

    section = data.get("tool", {}).get("lintgate", {})
    defaults = Config()
    timeout_raw = section.get("timeout", defaults.timeout)
    ignore_file_raw = section.get("ignore-file", defaults.ignore_file)
    opt_in_raw = section.get("require-opt-in", defaults.require_opt_in)
    return Config(
        root=pyproject.parent,
        executable=_str_tuple(section.get("executable"), defaults.executable),
        config_files=_str_tuple(section.get("config-files"), defaults.config_files),
        ignore=_str_tuple(section.get("ignore"), defaults.ignore),
        ignore_file=ignore_file_raw if isinstance(ignore_file_raw, str) else None,
        timeout=(
            float(timeout_raw)
            if isinstance(timeout_raw, int | float)
            and not isinstance(timeout_raw, bool)
            and timeout_raw > 0
            else defaults.timeout
        ),
        require_opt_in=opt_in_raw if isinstance(opt_in_raw, bool) else False,
    )


def build_linter(
    config: Config,
    opt_in: optin.OptInManager | None = None,
) -> linting.Linter:
    """Wire the default collaborators described by *config* into a Linter.

    Args:
        config: The active configuration.
        opt_in: Permission gate to use.  A new, activated manager is created
            when omitted.

    Returns:
        A Linter ready to lint and fix documents.
    """
    root = config.root if config.root is not None else pathlib.Path.cwd()
    if opt_in is None:
        opt_in = optin.OptInManager(require_opt_in=config.require_opt_in)
        opt_in.activate()
    return linting.Linter(
        permission_gate=opt_in,
        ignore_policy=ignore.GlobIgnorePolicy.from_config(
            root, config.ignore, config.ignore_file
        ),
        options_resolver=options.ConfigOptionsResolver(
            executable=config.executable,
            config_files=config.config_files,
            timeout=config.timeout,
        ),
        invoker=invoker.SubprocessInvoker(),
    )
