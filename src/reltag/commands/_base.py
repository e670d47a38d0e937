"""Custom Click base class and shared options.

:class:`RelCommand` accepts an ``examples`` parameter; passing
``--examples`` prints them and exits, keeping ``--help`` concise.
:func:`backend_options` adds the repository/backend flags shared by the
commands that read tags.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class RelCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def backend_options(func: F) -> F:
    """Decorate a command with release-file and backend selection options."""
    options = [
        click.option(
            "--release-file",
            type=click.Path(dir_okay=False),
            default=None,
            help="Release-line JSON file (default: release_file setting).",
        ),
        click.option(
            "--backend",
            type=click.Choice(["github", "git"]),
            default=None,
            help="Where tags are read from and created (default: backend setting).",
        ),
        click.option(
            "--repository",
            envvar="GITHUB_REPOSITORY",
            default=None,
            help="GitHub repository as owner/name.",
        ),
        click.option(
            "--token",
            envvar="GITHUB_TOKEN",
            default=None,
            help="GitHub token.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func
