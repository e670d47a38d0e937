"""Subcommand modules for reltag.

Provides register_commands() which uses deferred imports to keep
``reltag --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from reltag.commands.next_cmd import next_cmd
    from reltag.commands.parse import parse
    from reltag.commands.tag import tag

    cli.add_command(next_cmd)
    cli.add_command(tag)
    cli.add_command(parse)
