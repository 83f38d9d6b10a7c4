"""GenerateService — the ``generate`` pipeline.

Pipeline: NAME → CONFIRM → RESOLVE → DISPATCH → COPY → STORE → EDIT → EVENT
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pwctl.config.models import CoreConfig, GenerateConfig
from pwctl.domain.errors import AbortedError, NoNameError, PwctlError
from pwctl.domain.requests import GenerationRequest, OperationContext, ResolvedPlan
from pwctl.domain.secrets import parse_secret
from pwctl.infrastructure import clipboard
from pwctl.infrastructure.editor import edit_text
from pwctl.services.base import BaseService
from pwctl.services.dispatcher import DEFAULT_GENERATORS, Generators, dispatch
from pwctl.services.mutation import SecretMutation
from pwctl.services.resolver import PlanResolver
from pwctl.services.result import ServiceResult
from pwctl.services.telemetry import get_current_span, trace_span, traced

if TYPE_CHECKING:
    from pwctl.domain.rules import RuleBook
    from pwctl.infrastructure.prompts import Prompter
    from pwctl.infrastructure.store import SecretStore
    from pwctl.infrastructure.templates import TemplateRenderer
    from pwctl.plugins.manager import PluginManager

NAME_QUESTION = "Which name do you want to use?"
EDIT_MESSAGE = "Edited secret"

logger = logging.getLogger(__name__)


class GenerateService(BaseService):
    """Generate a password for a store entry and persist it."""

    def __init__(
        self,
        store: SecretStore,
        rules: RuleBook,
        prompter: Prompter,
        *,
        generate_config: GenerateConfig | None = None,
        core_config: CoreConfig | None = None,
        templates: TemplateRenderer | None = None,
        plugins: PluginManager | None = None,
        generators: Generators = DEFAULT_GENERATORS,
        resolver: PlanResolver | None = None,
        copy_to_clipboard: Callable[[str, str, int], None] | None = None,
        editor: Callable[[str], str | None] | None = None,
    ) -> None:
        super().__init__(store, plugins=plugins)
        self._prompter = prompter
        self._core = core_config or CoreConfig()
        self._generators = generators
        self._resolver = resolver or PlanResolver.from_environment(
            rules, prompter, generate_config
        )
        self._mutation = SecretMutation(store, rules, templates=templates, plugins=plugins)
        self._copy = copy_to_clipboard or clipboard.copy_to
        self._editor = editor or edit_text

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def generate(
        self,
        request: GenerationRequest,
        context: OperationContext,
        *,
        clip: bool = False,
        print_password: bool = False,
        edit: bool = False,
        terminal: bool = False,
    ) -> ServiceResult:
        """Run the full pipeline for one request.

        *terminal* tells whether stdout is attached to a terminal; automatic
        clipboard copies only happen when it is.
        """
        warnings: list[str] = []
        try:
            name = self._ask_name(request.target_name, context)
            key = request.field_key
            self._confirm_overwrite(name, key, context)

            with trace_span("resolve") as span:
                plan = self._resolver.resolve(
                    request.model_copy(update={"target_name": name}), context
                )
                if span:
                    span.annotate("length", plan.length)
                    span.annotate("generator", str(plan.generator_kind))

            with trace_span("dispatch"):
                password = dispatch(plan, name=name, context=context, generators=self._generators)

            messages, copied = self._copy_or_notice(
                name, key, password, clip=clip, print_password=print_password, terminal=terminal
            )

            with trace_span("store"):
                stored = self._mutation.apply(name, key, password, request.metadata, context)
            warnings.extend(stored.warnings)
            if not stored.ok:
                return stored.model_copy(update={"op": "generate", "warnings": warnings})

            if edit:
                self._edit(name, context, warnings)
        except PwctlError as exc:
            return ServiceResult.failure("generate", exc, warnings=warnings)

        self._dispatch_event(
            "post_generate",
            {"name": name, "key": key, "created": stored.data["mode"] == "create"},
            warnings,
        )

        current = get_current_span()
        if current:
            current.annotate("mode", stored.data["mode"])

        return ServiceResult(
            ok=True,
            op="generate",
            data=self._payload(
                name,
                key,
                plan,
                stored.data,
                messages,
                copied=copied,
                password=password if print_password else None,
            ),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _ask_name(self, name: str, context: OperationContext) -> str:
        if name:
            return name
        context.raise_if_cancelled()
        try:
            answer = self._prompter.ask_string(NAME_QUESTION, "").strip()
        except AbortedError as exc:
            raise NoNameError("please provide a password name") from exc
        if not answer:
            raise NoNameError("please provide a password name")
        return answer

    def _confirm_overwrite(self, name: str, key: str | None, context: OperationContext) -> None:
        if context.force or key or not self._store.exists(name):
            return
        question = f"An entry already exists for {name}. Overwrite the current password?"
        if not self._prompter.ask_confirmation(question):
            msg = "user aborted. not overwriting your current password"
            raise AbortedError(msg, name=name)

    def _copy_or_notice(
        self,
        name: str,
        key: str | None,
        password: str,
        *,
        clip: bool,
        print_password: bool,
        terminal: bool,
    ) -> tuple[list[str], bool]:
        """Copy to the clipboard when asked to and collect user-facing notices."""
        entry = f"{name} {key}" if key else name
        messages = [f'Password for entry "{entry}" generated']

        copied = False
        if clip or (self._core.autoclip and terminal):
            self._copy(name, password, self._core.cliptimeout)
            copied = True
            if self._core.autoclip and not print_password:
                messages.append("Copied to clipboard")
                return messages, copied

        if not print_password:
            messages.append(
                "Not printing secrets by default. Use --print to display the password."
            )
        return messages, copied

    def _edit(self, name: str, context: OperationContext, warnings: list[str]) -> None:
        if not self._prompter.ask_confirmation(f"Do you want to add more data for {name}?"):
            return
        context.raise_if_cancelled()
        try:
            current = self._store.get(name)
            edited = self._editor(current.render())
            if edited is None or edited == current.render():
                logger.debug("No changes made to %s", name)
                return
            path = self._store.set(name, parse_secret(edited), EDIT_MESSAGE)
        except PwctlError as exc:
            msg = f"failed to edit {name!r}: {exc.message}"
            raise PwctlError(msg, name=name) from exc
        self._dispatch_event(
            "post_write",
            {"name": name, "path": str(path), "message": EDIT_MESSAGE},
            warnings,
        )

    @staticmethod
    def _payload(
        name: str,
        key: str | None,
        plan: ResolvedPlan,
        stored: dict[str, Any],
        messages: list[str],
        *,
        copied: bool,
        password: str | None,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": name,
            "key": key,
            "length": plan.length,
            "generator": str(plan.generator_kind),
            "domain": plan.domain,
            "mode": stored["mode"],
            "kind": stored["kind"],
            "path": stored["path"],
            "copied": copied,
            "messages": messages,
        }
        if password is not None:
            data["password"] = password
        return data

