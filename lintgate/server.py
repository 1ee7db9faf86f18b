"""pygls LSP server for lintgate."""

import pathlib
import typing

from lsprotocol import types
from pygls.lsp import server as pygls_server

from lintgate import classifier, config, linting, optin, positions
from lintgate import diagnostics as lintgate_diagnostics

server = pygls_server.LanguageServer("lintgate", "v0.1.0")
opt_in = optin.OptInManager()
linter: linting.Linter | None = None

_ALLOW = "Allow"
_DENY = "Deny"

_SEVERITY_MAP = {
    lintgate_diagnostics.Severity.ERROR: types.DiagnosticSeverity.Error,
    lintgate_diagnostics.Severity.WARNING: types.DiagnosticSeverity.Warning,
}


def _to_range(span: positions.Span) -> types.Range:
    """Convert a (row, col) span to an LSP Range."""
    (start_row, start_col), (end_row, end_col) = span
    return types.Range(
        start=types.Position(line=start_row, character=start_col),
        end=types.Position(line=end_row, character=end_col),
    )


def _to_lsp(diag: lintgate_diagnostics.Diagnostic) -> types.Diagnostic:
    """Convert a lintgate Diagnostic to an LSP Diagnostic.

    Solutions travel in ``data`` so code actions can be built from the
    diagnostics the client sends back.
    """
    return types.Diagnostic(
        range=_to_range(diag.location.position),
        message=diag.excerpt,
        severity=_SEVERITY_MAP[diag.severity],
        code=diag.rule_id,
        source="lintgate",
        data=(
            [solution.to_dict() for solution in diag.solutions]
            if diag.solutions is not None
            else None
        ),
    )


def _quick_fixes(uri: str, diags: list[types.Diagnostic]) -> list[types.CodeAction]:
    """Build one quick-fix code action per solution carried by *diags*."""
    actions: list[types.CodeAction] = []
    for diag in diags:
        if not isinstance(diag.data, list):
            continue
        for solution in diag.data:
            if not isinstance(solution, dict):
                continue
            (start_row, start_col), (end_row, end_col) = solution["position"]
            edit = types.TextEdit(
                range=_to_range(((start_row, start_col), (end_row, end_col))),
                new_text=solution["replaceWith"],
            )
            actions.append(
                types.CodeAction(
                    title=f"Fix: {diag.message}",
                    kind=types.CodeActionKind.QuickFix,
                    diagnostics=[diag],
                    edit=types.WorkspaceEdit(changes={uri: [edit]}),
                )
            )
    return actions


def _full_range(text: str) -> types.Range:
    """Return the Range covering all of *text*."""
    lines = text.split("\n")
    return _to_range(((0, 0), (len(lines) - 1, len(lines[-1]))))


def _report_error(ls: pygls_server.LanguageServer) -> classifier.ReportError:
    """Return a reporter that shows failures to the user."""

    def report(error: BaseException) -> None:
        ls.window_show_message(
            types.ShowMessageParams(
                type=types.MessageType.Error,
                message=f"lintgate: {classifier.describe(error)}",
            )
        )

    return report


def _document(ls: pygls_server.LanguageServer, uri: str) -> linting.Document:
    text_document = ls.workspace.get_text_document(uri)
    return linting.Document(path=text_document.path, text=text_document.source)


def _workspace_root(ls: pygls_server.LanguageServer) -> pathlib.Path:
    root_path = ls.workspace.root_path
    return pathlib.Path(root_path) if root_path else pathlib.Path.cwd()


def _configure(root: pathlib.Path) -> config.Config:
    """Load the config under *root* and rebuild the permission gate and linter."""
    global opt_in, linter  # noqa: PLW0603
    cfg = config.load_config(root)
    opt_in = optin.OptInManager(require_opt_in=cfg.require_opt_in)
    linter = config.build_linter(cfg, opt_in)
    return cfg


def _get_linter() -> linting.Linter:
    if linter is None:
        _configure(pathlib.Path.cwd())
    return typing.cast("linting.Linter", linter)


async def request_approval(
    ls: pygls_server.LanguageServer,
    manager: optin.OptInManager,
    root: pathlib.Path,
) -> bool:
    """Ask the user whether the linter may run under *root*.

    Approves *root* on *manager* when the user picks ``Allow``.
    """
    choice = await ls.window_show_message_request_async(
        types.ShowMessageRequestParams(
            type=types.MessageType.Info,
            message=f"lintgate: allow the linter to run on files under {root}?",
            actions=[
                types.MessageActionItem(title=_ALLOW),
                types.MessageActionItem(title=_DENY),
            ],
        )
    )
    if choice is None or choice.title != _ALLOW:
        return False
    manager.approve(root)
    return True


async def _publish(ls: pygls_server.LanguageServer, uri: str) -> None:
    """Lint a document and publish diagnostics to the client."""
    document = _document(ls, uri)
    diagnostics = await _get_linter().lint(document, _report_error(ls))
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(
            uri=uri,
            diagnostics=[_to_lsp(diag) for diag in diagnostics],
        )
    )


@server.feature(types.INITIALIZED)
async def initialized(
    ls: pygls_server.LanguageServer,
    params: types.InitializedParams,
) -> None:
    """Load the workspace config and grant permission to lint.

    When the config requires opt-in, the user is asked first and open
    documents are re-linted once they agree.
    """
    root = _workspace_root(ls)
    cfg = _configure(root)
    opt_in.activate()
    if not cfg.require_opt_in:
        return
    if await request_approval(ls, opt_in, cfg.root or root):
        for uri in list(ls.workspace.text_documents):
            await _publish(ls, uri)


@server.feature(types.SHUTDOWN)
def shutdown(ls: pygls_server.LanguageServer, params: None) -> None:
    """Withdraw permission to lint."""
    opt_in.deactivate()


@server.feature(types.TEXT_DOCUMENT_DID_OPEN)
async def did_open(
    ls: pygls_server.LanguageServer,
    params: types.DidOpenTextDocumentParams,
) -> None:
    """Lint a newly opened document."""
    await _publish(ls, params.text_document.uri)


@server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
async def did_change(
    ls: pygls_server.LanguageServer,
    params: types.DidChangeTextDocumentParams,
) -> None:
    """Re-lint a document after every change."""
    await _publish(ls, params.text_document.uri)


@server.feature(types.TEXT_DOCUMENT_DID_SAVE)
async def did_save(
    ls: pygls_server.LanguageServer,
    params: types.DidSaveTextDocumentParams,
) -> None:
    """Re-lint a document after it is saved."""
    await _publish(ls, params.text_document.uri)


@server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
def did_close(
    ls: pygls_server.LanguageServer,
    params: types.DidCloseTextDocumentParams,
) -> None:
    """Clear diagnostics when a document is closed."""
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(uri=params.text_document.uri, diagnostics=[])
    )


@server.feature(
    types.TEXT_DOCUMENT_CODE_ACTION,
    types.CodeActionOptions(
        code_action_kinds=[
            types.CodeActionKind.QuickFix,
            types.CodeActionKind.SourceFixAll,
        ]
    ),
)
async def code_action(
    ls: pygls_server.LanguageServer,
    params: types.CodeActionParams,
) -> list[types.CodeAction]:
    """Offer quick fixes for the diagnostics in range and a fix-all action."""
    uri = params.text_document.uri
    actions = _quick_fixes(uri, params.context.diagnostics)
    only = params.context.only
    if only is not None and not any(kind.startswith("source") for kind in only):
        return actions

    document = _document(ls, uri)
    fixed = await _get_linter().fix(document, _report_error(ls))
    if fixed is not None and fixed != document.text:
        edit = types.TextEdit(range=_full_range(document.text), new_text=fixed)
        actions.append(
            types.CodeAction(
                title="Fix all auto-fixable problems",
                kind=types.CodeActionKind.SourceFixAll,
                edit=types.WorkspaceEdit(changes={uri: [edit]}),
            )
        )
    return actions


def start() -> None:
    """Start the LSP server over stdio."""
    server.start_io()
