"""Built-in Git plugin versioning every store write.

Each ``post_write`` stages the secret file and commits it with the change
annotation as the commit message. Pushing is optional.

All git subprocess calls are wrapped in try/except so a missing git binary
or a store that is not a repository never interrupts password generation.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

import pluggy

from pwctl.config.models import GitConfig

hookimpl = pluggy.HookimplMarker("pwctl")

logger = logging.getLogger(__name__)


class GitPlugin:
    """Commit store writes when the store root is a git work tree."""

    def __init__(self, config: GitConfig | None = None, store_root: Path | None = None) -> None:
        self._config = config or GitConfig()
        self._store_root = store_root

    @property
    def _enabled(self) -> bool:
        return (
            self._config.enabled
            and self._store_root is not None
            and (self._store_root / ".git").exists()
        )

    @hookimpl
    def post_write(self, name: str, path: str, message: str) -> None:
        """Stage and commit the written secret."""
        if not self._enabled:
            return
        self._git_add(path)
        self._git_commit(f"{message}: {name}")
        if self._config.auto_push:
            self._git_push()

    # ------------------------------------------------------------------
    # Git subprocess helpers
    # ------------------------------------------------------------------

    def _run_git(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run a git command in the store root. Raises on failure."""
        assert self._store_root is not None
        return subprocess.run(
            ["git", *args],
            cwd=self._store_root,
            capture_output=True,
            text=True,
            check=True,
        )

    def _git_add(self, path: str) -> None:
        try:
            self._run_git("add", path)
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.debug("git add failed: %s", exc)

    def _git_commit(self, message: str) -> None:
        """Commit staged changes. No-op if nothing staged."""
        try:
            self._run_git("diff", "--cached", "--quiet")
            return
        except subprocess.CalledProcessError:
            # Exit code 1 means there ARE staged changes
            pass
        except OSError as exc:
            logger.debug("git diff --cached failed: %s", exc)
            return

        try:
            self._run_git("commit", "-m", message)
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.debug("git commit failed: %s", exc)

    def _git_push(self) -> None:
        try:
            self._run_git("push")
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.debug("git push failed: %s", exc)
