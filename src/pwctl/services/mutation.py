"""Secret mutation transaction — reconcile a generated password with the store.

Three cases, chosen in order:

- **field**: a field key was given; the existing record gets that one field
  set. The record must already exist.
- **replace**: the record exists; its password slot is overwritten. Any
  failure here degrades to *create* instead of aborting.
- **create**: a new flat record is built, tagged with a change-password URL
  when one is known, and replaced by a structured record when a template is
  registered and renders cleanly.

Metadata ``key=value`` pairs are applied before the password in every case;
a field that cannot be set is skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pwctl.domain.errors import (
    PwctlError,
    SecretFieldError,
    SecretParseError,
    StoreError,
    TemplateRenderError,
)
from pwctl.domain.names import iter_child_segments_leaf_first
from pwctl.domain.requests import OperationContext
from pwctl.domain.secrets import FlatSecret, Secret, StructuredSecret
from pwctl.services.base import BaseService
from pwctl.services.result import ServiceError, ServiceResult
from pwctl.services.telemetry import trace_span

if TYPE_CHECKING:
    from pwctl.domain.rules import RuleBook
    from pwctl.infrastructure.store import SecretStore
    from pwctl.infrastructure.templates import TemplateRenderer
    from pwctl.plugins.manager import PluginManager

CHANGE_URL_FIELD = "password-change-url"

MSG_FIELD = "Generated password for key"
MSG_REPLACE = "Generated password for YAML key"
MSG_CREATE = "Generated Password"

logger = logging.getLogger(__name__)


def apply_metadata(secret: Secret, metadata: Mapping[str, str]) -> None:
    """Set each metadata field on *secret*, skipping fields the record rejects."""
    for key, value in metadata.items():
        try:
            secret.set(key, value)
        except SecretFieldError as exc:
            logger.debug("Skipping metadata field %r: %s", key, exc.message)


def find_change_url(rules: RuleBook, name: str) -> str:
    """First change-password URL for any non-root segment of *name*, leaf-first."""
    for segment in iter_child_segments_leaf_first(name):
        url = rules.lookup_change_url(segment)
        if url:
            return url
    return ""


class SecretMutation(BaseService):
    """Write a generated password into a new or existing secret record."""

    def __init__(
        self,
        store: SecretStore,
        rules: RuleBook,
        *,
        templates: TemplateRenderer | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        super().__init__(store, plugins=plugins)
        self._rules = rules
        self._templates = templates

    def apply(
        self,
        name: str,
        key: str | None,
        password: str,
        metadata: Mapping[str, str],
        context: OperationContext,
    ) -> ServiceResult:
        """Run the transaction. Fatal store failures come back as ``ENCRYPT`` errors."""
        warnings: list[str] = []
        try:
            context.raise_if_cancelled()

            if key:
                with trace_span("set_field"):
                    return self._set_field(name, key, password, metadata, warnings)

            if self._store.exists(name):
                with trace_span("replace_existing"):
                    replaced = self._replace_existing(name, password, metadata)
                if replaced.ok:
                    return replaced
                reason = replaced.error.message if replaced.error else "unknown error"
                logger.warning("Failed to read existing secret %s, creating anew: %s", name, reason)
                warnings.append(f"Failed to read existing secret. Creating anew. Error: {reason}")

            context.raise_if_cancelled()
            with trace_span("create_new"):
                return self._create_new(name, password, metadata, warnings)
        except PwctlError as exc:
            return ServiceResult.failure("store_password", exc, warnings=warnings)

    # ------------------------------------------------------------------
    # Cases
    # ------------------------------------------------------------------

    def _set_field(
        self,
        name: str,
        key: str,
        password: str,
        metadata: Mapping[str, str],
        warnings: list[str],
    ) -> ServiceResult:
        try:
            secret = self._store.get(name)
        except StoreError as exc:
            msg = f"failed to set key {key!r} of {name!r}: {exc.message}"
            raise StoreError(msg, name=name, key=key) from exc

        apply_metadata(secret, metadata)
        try:
            secret.set(key, password)
        except SecretFieldError as exc:
            logger.debug("Could not set %r on %s: %s", key, name, exc.message)
            warnings.append(f"Could not set key {key!r}: {exc.message}")

        path = self._write(name, secret, MSG_FIELD, key=key, warnings=warnings)
        return self._ok("field", name, key, secret, path, warnings)

    def _replace_existing(
        self,
        name: str,
        password: str,
        metadata: Mapping[str, str],
    ) -> ServiceResult:
        """Overwrite the password slot; failures are returned, never raised."""
        warnings: list[str] = []
        try:
            secret = self._store.get(name)
            apply_metadata(secret, metadata)
            secret.set_password(password)
            path = self._write(name, secret, MSG_REPLACE, warnings=warnings)
        except StoreError as exc:
            return ServiceResult(
                ok=False,
                op="store_password",
                error=ServiceError(
                    code=exc.code,
                    message=f"failed to update {name!r}: {exc.message}",
                    detail={"name": name},
                ),
            )
        return self._ok("replace", name, None, secret, path, warnings)

    def _create_new(
        self,
        name: str,
        password: str,
        metadata: Mapping[str, str],
        warnings: list[str],
    ) -> ServiceResult:
        secret: Secret = FlatSecret()
        apply_metadata(secret, metadata)
        secret.set_password(password)
        if url := find_change_url(self._rules, name):
            secret.set(CHANGE_URL_FIELD, url)

        structured = self._from_template(name, password, warnings)
        if structured is not None:
            apply_metadata(structured, metadata)
            secret = structured

        try:
            path = self._write(name, secret, MSG_CREATE, warnings=warnings)
        except StoreError as exc:
            msg = f"failed to create {name!r}: {exc.message}"
            raise StoreError(msg, name=name) from exc
        return self._ok("create", name, None, secret, path, warnings)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _from_template(
        self, name: str, password: str, warnings: list[str]
    ) -> StructuredSecret | None:
        """Render and parse the template for *name*; None when absent or broken."""
        if self._templates is None:
            return None
        try:
            content = self._templates.render(name, password)
            if content is None:
                return None
            return StructuredSecret.parse(content)
        except (TemplateRenderError, SecretParseError) as exc:
            logger.warning("Failed to handle template for %s: %s", name, exc)
            warnings.append(f"Template for {name!r} ignored: {exc}")
            return None

    def _write(
        self,
        name: str,
        secret: Secret,
        message: str,
        *,
        warnings: list[str],
        key: str | None = None,
    ) -> str:
        try:
            path = self._store.set(name, secret, message)
        except StoreError as exc:
            if key is not None:
                msg = f"failed to set key {key!r} of {name!r}: {exc.message}"
                raise StoreError(msg, name=name, key=key) from exc
            raise
        self._dispatch_event(
            "post_write",
            {"name": name, "path": str(path), "message": message},
            warnings,
        )
        return str(path)

    @staticmethod
    def _ok(
        mode: str,
        name: str,
        key: str | None,
        secret: Secret,
        path: str,
        warnings: list[str],
    ) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op="store_password",
            data={
                "name": name,
                "key": key,
                "mode": mode,
                "kind": secret.kind,
                "path": path,
            },
            warnings=warnings,
        )
