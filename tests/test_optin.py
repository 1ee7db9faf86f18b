"""Tests for lintgate.optin: the permission gate."""

import asyncio
import pathlib

from lintgate import linting, optin


def _allowed(manager: optin.OptInManager, path: pathlib.Path) -> bool:
    document = linting.Document(path=str(path), text="")
    return asyncio.run(manager.check_permission(document))


class TestLifecycle:
    def test_inactive_manager_denies(self, tmp_path: pathlib.Path) -> None:
        assert not _allowed(optin.OptInManager(), tmp_path / "a.js")

    def test_activate_grants(self, tmp_path: pathlib.Path) -> None:
        manager = optin.OptInManager()
        manager.activate()
        assert manager.is_active
        assert _allowed(manager, tmp_path / "a.js")

    def test_deactivate_denies_again(self, tmp_path: pathlib.Path) -> None:
        manager = optin.OptInManager()
        manager.activate()
        manager.deactivate()
        assert not manager.is_active
        assert not _allowed(manager, tmp_path / "a.js")


class TestRequireOptIn:
    def test_unapproved_project_is_denied(self, tmp_path: pathlib.Path) -> None:
        manager = optin.OptInManager(require_opt_in=True)
        manager.activate()
        assert not _allowed(manager, tmp_path / "a.js")

    def test_approved_project_is_granted(self, tmp_path: pathlib.Path) -> None:
        manager = optin.OptInManager(require_opt_in=True)
        manager.activate()
        manager.approve(tmp_path)
        assert _allowed(manager, tmp_path / "src" / "a.js")

    def test_approval_does_not_leak_to_siblings(self, tmp_path: pathlib.Path) -> None:
        manager = optin.OptInManager(require_opt_in=True)
        manager.activate()
        manager.approve(tmp_path / "one")
        assert not _allowed(manager, tmp_path / "two" / "a.js")

    def test_revoke(self, tmp_path: pathlib.Path) -> None:
        manager = optin.OptInManager(require_opt_in=True)
        manager.activate()
        manager.approve(tmp_path)
        manager.revoke(tmp_path)
        assert not _allowed(manager, tmp_path / "a.js")

    def test_deactivate_forgets_approvals(self, tmp_path: pathlib.Path) -> None:
        manager = optin.OptInManager(require_opt_in=True)
        manager.activate()
        manager.approve(tmp_path)
        manager.deactivate()
        manager.activate()
        assert not _allowed(manager, tmp_path / "a.js")
