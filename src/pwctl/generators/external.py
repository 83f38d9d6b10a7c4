"""Delegate password generation to an external program.

The command comes from ``PWCTL_EXTERNAL_PWGEN`` (shell-style quoting
allowed); the requested length is appended as the final argument. The
first line of stdout is the password.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess

from pwctl.domain.errors import GenerationError

EXTERNAL_ENV_VAR = "PWCTL_EXTERNAL_PWGEN"

logger = logging.getLogger(__name__)


def generate_external(length: int, *, timeout: float = 30.0, command: str | None = None) -> str:
    """Run the configured external generator with *length* as a hint."""
    command = command if command is not None else os.environ.get(EXTERNAL_ENV_VAR, "")
    argv = shlex.split(command)
    if not argv:
        msg = f"no external generator configured (set {EXTERNAL_ENV_VAR})"
        raise GenerationError(msg)

    argv.append(str(length))
    logger.debug("Running external generator: %s", argv[0])
    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        msg = f"external generator timed out after {timeout:g}s"
        raise GenerationError(msg) from exc
    except (OSError, subprocess.CalledProcessError) as exc:
        msg = f"external generator failed: {exc}"
        raise GenerationError(msg) from exc

    lines = result.stdout.splitlines()
    return lines[0].strip() if lines else ""
