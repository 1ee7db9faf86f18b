"""Opt-in permission gate for running the analyzer."""

import logging
import pathlib

from lintgate import linting

LOGGER = logging.getLogger(__name__)


class OptInManager:
    """Grants or denies permission to lint a document.

    Nothing is permitted until ``activate()`` is called.  When
    ``require_opt_in`` is set, a document is only permitted if it lives under
    a project root passed to ``approve()``.
    """

    def __init__(self, *, require_opt_in: bool = False) -> None:
        """Initialize an inactive manager."""
        self.require_opt_in = require_opt_in
        self._active = False
        self._approved: set[pathlib.Path] = set()

    @property
    def is_active(self) -> bool:
        """Whether the manager currently grants any permission."""
        return self._active

    def activate(self) -> None:
        """Start granting permission."""
        self._active = True

    def deactivate(self) -> None:
        """Stop granting permission and forget every approval."""
        self._active = False
        self._approved.clear()

    def approve(self, root: pathlib.Path | str) -> None:
        """Allow linting of every document under *root*."""
        self._approved.add(pathlib.Path(root).resolve())
        LOGGER.info("Approved linting under %s", root)

    def revoke(self, root: pathlib.Path | str) -> None:
        """Withdraw a previous approval of *root*."""
        self._approved.discard(pathlib.Path(root).resolve())

    async def check_permission(self, document: linting.Document) -> bool:
        """Return True if the analyzer may run on *document*."""
        if not self._active:
            return False
        if not self.require_opt_in:
            return True
        path = pathlib.Path(document.path).resolve()
        return any(path.is_relative_to(root) for root in self._approved)
