"""Tests for GitPlugin — commits store writes in a git work tree."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from pwctl.config.models import GitConfig
from pwctl.domain.secrets import FlatSecret
from pwctl.infrastructure.store import FileStore
from pwctl.plugins.builtins.git import GitPlugin

needs_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(cwd: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    ).stdout


@pytest.fixture
def git_store(store_root: Path) -> Path:
    _git(store_root, "init")
    _git(store_root, "config", "user.email", "test@example.com")
    _git(store_root, "config", "user.name", "Test")
    return store_root


def _commit_messages(cwd: Path) -> list[str]:
    return _git(cwd, "log", "--format=%s").strip().splitlines()


@needs_git
class TestCommits:
    def test_commits_written_secret(self, git_store: Path) -> None:
        path = FileStore(git_store).set("web/site", FlatSecret("x"), "Generated Password")
        GitPlugin(GitConfig(), git_store).post_write(
            name="web/site", path=str(path), message="Generated Password"
        )
        assert _commit_messages(git_store) == ["Generated Password: web/site"]

    def test_nothing_staged_no_commit(self, git_store: Path) -> None:
        plugin = GitPlugin(GitConfig(), git_store)
        plugin.post_write(name="ghost", path=str(git_store / "ghost.secret"), message="m")
        result = subprocess.run(
            ["git", "log"], cwd=git_store, capture_output=True, text=True, check=False
        )
        assert result.returncode != 0


class TestDisabled:
    def test_not_a_repository(self, store_root: Path) -> None:
        with patch("subprocess.run") as run:
            GitPlugin(GitConfig(), store_root).post_write(name="a", path="a.secret", message="m")
        run.assert_not_called()

    def test_disabled_in_config(self, store_root: Path) -> None:
        (store_root / ".git").mkdir()
        with patch("subprocess.run") as run:
            GitPlugin(GitConfig(enabled=False), store_root).post_write(
                name="a", path="a.secret", message="m"
            )
        run.assert_not_called()

    def test_no_store_root(self) -> None:
        with patch("subprocess.run") as run:
            GitPlugin().post_write(name="a", path="a.secret", message="m")
        run.assert_not_called()


class TestFailures:
    def test_missing_git_binary_is_swallowed(self, store_root: Path) -> None:
        (store_root / ".git").mkdir()
        with patch("subprocess.run", side_effect=FileNotFoundError("git")):
            GitPlugin(GitConfig(), store_root).post_write(name="a", path="a.secret", message="m")

    def test_auto_push(self, store_root: Path) -> None:
        (store_root / ".git").mkdir()
        calls: list[list[str]] = []

        def fake_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
            calls.append(cmd)
            if cmd[1] == "diff":
                raise subprocess.CalledProcessError(1, cmd)
            return subprocess.CompletedProcess(cmd, 0, "", "")

        with patch("subprocess.run", side_effect=fake_run):
            GitPlugin(GitConfig(auto_push=True), store_root).post_write(
                name="a", path="a.secret", message="m"
            )
        assert [c[1] for c in calls] == ["add", "diff", "commit", "push"]
