"""Jinja2 secret templates discovered inside the store.

A template is a file named ``.pwctl-template`` (configurable) placed in any
store directory. The template closest to the secret wins: for
``web/shop/alice`` the lookup order is ``web/shop/``, ``web/``, then the
store root.

Templates see ``password``, ``name``, ``basename`` and ``dir`` and may use
the ``md5sum``, ``sha1sum`` and ``sha256sum`` filters.
"""

from __future__ import annotations

import hashlib
import posixpath
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from pwctl.domain.errors import TemplateRenderError

DEFAULT_TEMPLATE_NAME = ".pwctl-template"


def _digest(algorithm: str):
    def _filter(value: object) -> str:
        return hashlib.new(algorithm, str(value).encode("utf-8")).hexdigest()

    return _filter


def build_template_environment(store_root: Path) -> Environment:
    """Build a Jinja2 environment rooted at the store directory."""
    env = Environment(
        loader=FileSystemLoader(str(store_root)),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        autoescape=False,
    )
    env.filters["md5sum"] = _digest("md5")
    env.filters["sha1sum"] = _digest("sha1")
    env.filters["sha256sum"] = _digest("sha256")
    return env


class TemplateRenderer:
    """Find and render the template registered for a secret name."""

    def __init__(self, store_root: Path, template_name: str = DEFAULT_TEMPLATE_NAME) -> None:
        self._root = store_root
        self._template_name = template_name
        self._env: Environment | None = None

    def lookup(self, name: str) -> str | None:
        """Return the store-relative template path for *name*, if any."""
        directory = posixpath.dirname(name.strip("/"))
        while True:
            candidate = posixpath.join(directory, self._template_name)
            if (self._root / candidate).is_file():
                return candidate
            if not directory:
                return None
            directory = posixpath.dirname(directory)

    def render(self, name: str, password: str) -> str | None:
        """Render the template for *name*; None when no template is registered.

        Any failure to load or render the template is raised as
        :class:`TemplateRenderError` so the caller can decide how to degrade.
        """
        template_path = self.lookup(name)
        if template_path is None:
            return None
        if self._env is None:
            self._env = build_template_environment(self._root)
        try:
            template = self._env.get_template(template_path)
            return template.render(
                password=password,
                name=name,
                basename=posixpath.basename(name),
                dir=posixpath.dirname(name),
            )
        except Exception as exc:
            msg = f"failed to render template {template_path}: {exc}"
            raise TemplateRenderError(msg, name=name, template=template_path) from exc
