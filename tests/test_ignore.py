"""Tests for lintgate.ignore: glob-based ignore policy."""

import pathlib

from lintgate import ignore


def _policy(tmp_path: pathlib.Path, *patterns: str) -> ignore.GlobIgnorePolicy:
    return ignore.GlobIgnorePolicy(tmp_path, list(patterns))


def _ignored(policy: ignore.GlobIgnorePolicy, path: pathlib.Path) -> bool:
    return policy.is_ignored(str(path))


class TestPatterns:
    def test_no_patterns_ignores_nothing(self, tmp_path: pathlib.Path) -> None:
        assert not _ignored(_policy(tmp_path), tmp_path / "a.js")

    def test_directory_pattern_matches_contents(self, tmp_path: pathlib.Path) -> None:
        policy = _policy(tmp_path, "dist/")
        assert _ignored(policy, tmp_path / "dist" / "a.js")
        assert _ignored(policy, tmp_path / "pkg" / "dist" / "deep" / "a.js")

    def test_directory_pattern_skips_files(self, tmp_path: pathlib.Path) -> None:
        assert not _ignored(_policy(tmp_path, "dist/"), tmp_path / "dist")

    def test_basename_pattern_matches_anywhere(self, tmp_path: pathlib.Path) -> None:
        policy = _policy(tmp_path, "*.min.js")
        assert _ignored(policy, tmp_path / "a.min.js")
        assert _ignored(policy, tmp_path / "lib" / "b.min.js")
        assert not _ignored(policy, tmp_path / "lib" / "b.js")

    def test_anchored_pattern(self, tmp_path: pathlib.Path) -> None:
        policy = _policy(tmp_path, "/build/*.js")
        assert _ignored(policy, tmp_path / "build" / "x.js")
        assert not _ignored(policy, tmp_path / "src" / "build" / "x.js")

    def test_negation_reincludes(self, tmp_path: pathlib.Path) -> None:
        policy = _policy(tmp_path, "*.min.js", "!keep.min.js")
        assert _ignored(policy, tmp_path / "a.min.js")
        assert not _ignored(policy, tmp_path / "keep.min.js")

    def test_paths_outside_root_are_not_ignored(self, tmp_path: pathlib.Path) -> None:
        policy = _policy(tmp_path / "project", "*")
        assert not _ignored(policy, tmp_path / "elsewhere" / "a.js")


class TestFromConfig:
    def test_reads_ignore_file(self, tmp_path: pathlib.Path) -> None:
        (tmp_path / ".eslintignore").write_text("# comment\n\n  vendor/  \n")
        policy = ignore.GlobIgnorePolicy.from_config(
            tmp_path, ("*.min.js",), ".eslintignore"
        )
        assert policy.patterns == ["*.min.js", "vendor/"]
        assert _ignored(policy, tmp_path / "vendor" / "lib.js")

    def test_missing_ignore_file(self, tmp_path: pathlib.Path) -> None:
        policy = ignore.GlobIgnorePolicy.from_config(tmp_path, (), ".eslintignore")
        assert policy.patterns == []

    def test_no_ignore_file(self, tmp_path: pathlib.Path) -> None:
        (tmp_path / ".eslintignore").write_text("vendor/\n")
        policy = ignore.GlobIgnorePolicy.from_config(tmp_path, (), None)
        assert policy.patterns == []
