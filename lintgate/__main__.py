"""Entry point: lintgate [check <path>... | serve]."""

import asyncio
import logging
import pathlib
import typing

import typer

from lintgate import classifier
from lintgate import diagnostics as lintgate_diagnostics
from lintgate import linting

app = typer.Typer()

# File suffixes handed to the analyzer when a directory is given.
_SOURCE_SUFFIXES: frozenset[str] = frozenset(
    {".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts", ".vue"}
)

# Directories that are never interesting to analyse.
_SKIP_DIRS: frozenset[str] = frozenset(
    {".venv", "venv", "__pycache__", ".git", "node_modules", "build", "dist", ".tox"}
)


def _collect_source_files(root: pathlib.Path) -> list[pathlib.Path]:
    """Recursively find lintable files under root, skipping non-source directories."""
    return sorted(
        source_file
        for source_file in root.rglob("*")
        if source_file.suffix in _SOURCE_SUFFIXES
        and source_file.is_file()
        and not any(part in _SKIP_DIRS for part in source_file.parts)
    )


def _resolve_files(paths: list[pathlib.Path]) -> list[pathlib.Path]:
    """Expand directories into a deduplicated file list."""
    candidates: list[pathlib.Path] = []
    for raw_path in paths:
        if raw_path.is_dir():
            candidates.extend(_collect_source_files(raw_path))
        else:
            candidates.append(raw_path)
    seen: set[pathlib.Path] = set()
    unique: list[pathlib.Path] = []
    for file_path in candidates:
        resolved = file_path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            unique.append(file_path)
    return unique


def _format(file_path: pathlib.Path, diag: lintgate_diagnostics.Diagnostic) -> str:
    """Render a diagnostic as ``path:line:col: severity excerpt (rule)``."""
    row, col = diag.location.position[0]
    rule = f" ({diag.rule_id})" if diag.rule_id else ""
    location = f"{file_path}:{row + 1}:{col + 1}"
    return f"{location}: {diag.severity.value} {diag.excerpt}{rule}"


def _report_error(error: BaseException) -> None:
    typer.echo(f"error: {classifier.describe(error)}", err=True)


def _build_linter(*, allow_project: bool = False) -> linting.Linter:
    """Build the linter from the nearest config, approving the project if asked."""
    from lintgate import config as lintgate_config  # noqa: PLC0415
    from lintgate import optin  # noqa: PLC0415

    cfg = lintgate_config.load_config()
    opt_in = optin.OptInManager(require_opt_in=cfg.require_opt_in)
    opt_in.activate()
    if allow_project:
        opt_in.approve(cfg.root or pathlib.Path.cwd())
    elif cfg.require_opt_in:
        typer.echo(
            "warning: this project requires opt-in; pass --allow-project to lint it",
            err=True,
        )
    return lintgate_config.build_linter(cfg, opt_in)


async def _check_file(
    linter: linting.Linter,
    file_path: pathlib.Path,
    source: str,
    *,
    fix: bool,
) -> list[lintgate_diagnostics.Diagnostic]:
    """Optionally fix, then lint one file."""
    document = linting.Document(path=str(file_path.resolve()), text=source)
    if fix:
        fixed_source = await linter.fix(document, _report_error)
        if fixed_source is not None and fixed_source != source:
            file_path.write_text(fixed_source)
            # Re-lint to report any remaining violations.
            document = linting.Document(path=document.path, text=fixed_source)
    return await linter.lint(document, _report_error)


@app.command(no_args_is_help=True)
def check(
    paths: typing.Annotated[
        list[pathlib.Path],
        typer.Argument(help="Files or directories to check."),
    ],
    fix: typing.Annotated[  # noqa: FBT002
        bool,
        typer.Option("--fix", help="Apply the analyzer's auto-fixes."),
    ] = False,
    allow_project: typing.Annotated[  # noqa: FBT002
        bool,
        typer.Option(
            "--allow-project",
            help="Allow the linter to run in a project that requires opt-in.",
        ),
    ] = False,
    verbose: typing.Annotated[  # noqa: FBT002
        bool,
        typer.Option("--verbose", "-v", help="Log pipeline decisions to stderr."),
    ] = False,
) -> None:
    """Lint one or more files/directories through the analyzer.

    Raises:
        typer.Exit: With code 1 if any diagnostics remain.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.ERROR)
    linter = _build_linter(allow_project=allow_project)
    found_any = False

    for file_path in _resolve_files(paths):
        try:
            source = file_path.read_text()
        except OSError as e:
            typer.echo(f"error: {e}", err=True)
            continue

        diagnostics = asyncio.run(_check_file(linter, file_path, source, fix=fix))
        for diag in diagnostics:
            typer.echo(_format(file_path, diag))
        if diagnostics:
            found_any = True

    if found_any:
        raise typer.Exit(code=1)


@app.command()
def serve() -> None:
    """Run the LSP server over stdio."""
    from lintgate import server  # noqa: PLC0415

    server.start()


def main() -> None:
    """Dispatch to CLI check mode or LSP server mode."""
    app()


if __name__ == "__main__":
    main()
