"""Clipboard transfer through platform command-line tools.

Copying spawns a detached ``pwctl unclip`` process which waits for the
configured timeout and then clears the clipboard, but only if it still
holds the value we copied (compared by SHA-256 checksum).
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import subprocess
import sys
import time

from pwctl.domain.errors import IO, PwctlError

UNCLIP_CHECKSUM_ENV = "PWCTL_UNCLIP_CHECKSUM"

# (copy argv, paste argv) per tool, in preference order.
_TOOLS: list[tuple[list[str], list[str]]] = [
    (["wl-copy"], ["wl-paste", "--no-newline"]),
    (["xclip", "-selection", "clipboard"], ["xclip", "-selection", "clipboard", "-o"]),
    (["xsel", "--clipboard", "--input"], ["xsel", "--clipboard", "--output"]),
    (["pbcopy"], ["pbpaste"]),
    (["clip.exe"], ["powershell.exe", "-NoProfile", "-Command", "Get-Clipboard"]),
]

logger = logging.getLogger(__name__)


class ClipboardError(PwctlError):
    """No clipboard tool is available or the copy failed."""

    code = IO


def checksum(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def _find_tool() -> tuple[list[str], list[str]] | None:
    for copy_argv, paste_argv in _TOOLS:
        if shutil.which(copy_argv[0]):
            return copy_argv, paste_argv
    return None


def _write(content: str) -> None:
    tool = _find_tool()
    if tool is None:
        msg = "no clipboard tool found (install wl-clipboard, xclip, or xsel)"
        raise ClipboardError(msg)
    try:
        subprocess.run(tool[0], input=content, text=True, check=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as exc:
        msg = f"clipboard copy failed: {exc}"
        raise ClipboardError(msg) from exc


def read() -> str | None:
    """Return current clipboard text, or None when it cannot be read."""
    tool = _find_tool()
    if tool is None:
        return None
    try:
        result = subprocess.run(tool[1], capture_output=True, text=True, check=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("clipboard read failed: %s", exc)
        return None
    return result.stdout


def copy_to(name: str, content: str, timeout: int) -> None:
    """Copy *content* to the clipboard and schedule clearing after *timeout* seconds."""
    _write(content)
    logger.debug("Copied %s to clipboard (clears in %ss)", name, timeout)
    if timeout <= 0:
        return

    env = {**os.environ, UNCLIP_CHECKSUM_ENV: checksum(content)}
    try:
        subprocess.Popen(
            [sys.executable, "-m", "pwctl", "unclip", "--timeout", str(timeout)],
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        logger.warning("Could not schedule clipboard clearing: %s", exc)


def clear_after(timeout: int, expected_checksum: str | None) -> bool:
    """Sleep *timeout* seconds, then clear the clipboard if it is unchanged.

    Returns True when the clipboard was cleared.
    """
    time.sleep(max(0, timeout))
    if expected_checksum:
        current = read()
        if current is not None and checksum(current) != expected_checksum:
            logger.debug("Clipboard changed since copy; leaving it alone")
            return False
    _write("")
    return True
