"""Command: check tag names against the tag grammar."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reltag.commands._base import RelCommand

if TYPE_CHECKING:
    from reltag.commands._context import AppContext


@click.command(
    cls=RelCommand,
    examples="""\
  reltag parse v2024.up1.0 v2024.up3.1.7
  git tag --list | xargs reltag parse
  reltag --json parse not-a-tag""",
)
@click.argument("tags", nargs=-1, required=True)
@click.pass_obj
def parse(app: AppContext, tags: tuple[str, ...]) -> None:
    """Classify TAGS as valid release tags or explain why they are not."""
    from reltag.services.tagging import TagService

    app.emit(TagService(app.settings).parse_tags(tags))
