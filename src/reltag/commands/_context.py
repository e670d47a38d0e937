"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides backend construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from reltag.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from reltag.config.settings import ReltagSettings
    from reltag.infrastructure.backends import TagBackend
    from reltag.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Backends are only built when a command asks for one, so ``--help``,
    ``--version`` and ``parse`` never touch the network or git.
    """

    def __init__(self, settings: ReltagSettings) -> None:
        self.settings = settings

        from reltag.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def backend_factory(
        self,
        *,
        backend: str | None = None,
        repository: str | None = None,
        token: str | None = None,
    ) -> Callable[[], TagBackend]:
        """Return a zero-argument opener for the selected backend."""
        from reltag.infrastructure.backends import build_backend

        def open_backend() -> TagBackend:
            return build_backend(
                self.settings,
                backend=backend,
                repository=repository,
                token=token,
            )

        return open_backend

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
