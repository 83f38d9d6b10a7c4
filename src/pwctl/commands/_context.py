"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy store, plugin, and rule-book
initialization and centralized result emission (stdout/stderr routing +
exit codes).
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from pwctl.domain.errors import exit_code_for
from pwctl.domain.requests import OperationContext
from pwctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pwctl.config.settings import PwctlSettings
    from pwctl.domain.rules import RuleBook
    from pwctl.infrastructure.prompts import ClickPrompter
    from pwctl.infrastructure.store import FileStore
    from pwctl.infrastructure.templates import TemplateRenderer
    from pwctl.plugins.manager import PluginManager
    from pwctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  Collaborators are built
    lazily on first use so ``--help`` and ``--version`` never touch the
    store or load plugins.
    """

    def __init__(self, settings: PwctlSettings) -> None:
        self.settings = settings
        self._store: FileStore | None = None
        self._plugins: PluginManager | None = None
        self._rules: RuleBook | None = None

        # Configure structured logging
        from pwctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from pwctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def interactive(self) -> bool:
        """Prompts require no ``--no-interact``, no ``--json``, and a TTY on stdin."""
        return (
            not self.settings.no_interact
            and not self.settings.json_output
            and sys.stdin.isatty()
        )

    @property
    def store(self) -> FileStore:
        """The secret store (created lazily on first access)."""
        if self._store is None:
            from pwctl.infrastructure.store import FileStore

            self._store = FileStore(self.settings.store_root)
        return self._store

    @property
    def plugins(self) -> PluginManager:
        """Plugin manager with the built-in git plugin and entry-point plugins."""
        if self._plugins is None:
            from pwctl.plugins.builtins.git import GitPlugin
            from pwctl.plugins.manager import PluginManager

            manager = PluginManager()
            manager.register_plugin(
                GitPlugin(self.settings.git, self.settings.store_root), name="git"
            )
            try:
                manager.discover_and_load()
            except Exception:
                logger.warning("Failed to load entry-point plugins", exc_info=True)
            self._plugins = manager
        return self._plugins

    @property
    def rules(self) -> RuleBook:
        """Built-in rules, overlaid by plugin rules, overlaid by ``[rules]`` config."""
        if self._rules is None:
            from pwctl.domain.rules import RuleBook

            book = RuleBook.builtin()
            try:
                book.update(self.plugins.collect_domain_rules())
                book.update(
                    {
                        domain: spec.model_dump(exclude_none=True)
                        for domain, spec in self.settings.rules.items()
                    }
                )
            except (TypeError, ValidationError) as exc:
                msg = f"Invalid domain rule: {exc}"
                raise click.ClickException(msg) from exc
            self._rules = book
        return self._rules

    @property
    def templates(self) -> TemplateRenderer:
        from pwctl.infrastructure.templates import TemplateRenderer

        return TemplateRenderer(self.settings.store_root, self.settings.store.template_name)

    def prompter(self) -> ClickPrompter:
        from pwctl.infrastructure.prompts import ClickPrompter

        return ClickPrompter(interactive=self.interactive, always_yes=self.settings.yes)

    def operation_context(self, *, force: bool = False) -> OperationContext:
        return OperationContext(
            force=force,
            interactive=self.interactive,
            always_yes=self.settings.yes,
            external_timeout=self.settings.generate.external_timeout,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with the status mapped from the
          error code.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(exit_code_for(result.error.code if result.error else None))
