"""Secret store contract and the default directory-backed implementation.

INVARIANT: the store owns persistence. Callers perform at most one
read-then-write per record per invocation and never touch files directly.

:class:`FileStore` keeps one ``<name>.secret`` file per entry below the
store root, written atomically with owner-only permissions. Versioning is
delegated to plugins (see :mod:`pwctl.plugins.builtins.git`) which receive
the change annotation through the ``post_write`` hook.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pwctl.domain.errors import SecretNotFoundError, SecretParseError, StoreError
from pwctl.domain.names import validate_name
from pwctl.domain.secrets import Secret, parse_secret

SECRET_SUFFIX = ".secret"

logger = logging.getLogger(__name__)


class SecretStore(Protocol):
    """Narrow store contract consumed by the services."""

    def exists(self, name: str) -> bool: ...

    def get(self, name: str) -> Secret: ...

    def set(self, name: str, secret: Secret, message: str) -> Path: ...

    def list(self) -> list[str]: ...


class FileStore:
    """Directory of plaintext secret files keyed by hierarchical name."""

    def __init__(self, root: Path) -> None:
        self.root = root

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def path_for(self, name: str) -> Path:
        """Resolve the file path for *name*, rejecting traversal outside the root."""
        try:
            cleaned = validate_name(name)
        except ValueError as exc:
            raise StoreError(str(exc), name=name) from exc

        path = self.root / f"{cleaned}{SECRET_SUFFIX}"
        if not path.resolve().is_relative_to(self.root.resolve()):
            msg = f"Path escapes store root: {name}"
            raise StoreError(msg, name=name)
        return path

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    def exists(self, name: str) -> bool:
        try:
            return self.path_for(name).is_file()
        except StoreError:
            return False

    def get(self, name: str) -> Secret:
        path = self.path_for(name)
        if not path.is_file():
            msg = f"entry {name!r} is not in the store"
            raise SecretNotFoundError(msg, name=name)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"failed to read {name!r}: {exc}"
            raise StoreError(msg, name=name) from exc
        try:
            return parse_secret(content)
        except SecretParseError as exc:
            msg = f"failed to decode {name!r}: {exc.message}"
            raise StoreError(msg, name=name) from exc

    def set(self, name: str, secret: Secret, message: str) -> Path:
        """Write *secret* atomically. *message* is the change annotation."""
        path = self.path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=SECRET_SUFFIX)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(secret.render())
                os.chmod(tmp, 0o600)
                os.replace(tmp, path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            msg = f"failed to write {name!r}: {exc}"
            raise StoreError(msg, name=name) from exc

        logger.debug("Stored %s (%s)", name, message)
        return path

    def list(self) -> list[str]:
        """All entry names, sorted, skipping dot-directories."""
        if not self.root.is_dir():
            return []
        names: list[str] = []
        for path in self.root.rglob(f"*{SECRET_SUFFIX}"):
            rel = path.relative_to(self.root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            names.append(rel.with_suffix("").as_posix())
        return sorted(names)
