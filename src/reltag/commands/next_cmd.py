"""Command: preview the next release tag."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reltag.commands._base import RelCommand, backend_options

if TYPE_CHECKING:
    from reltag.commands._context import AppContext


@click.command(
    "next",
    cls=RelCommand,
    examples="""\
  reltag next --repository acme/widgets
  reltag next --backend git
  reltag -q next --backend git --release-file ci/release.json
  reltag --json next""",
)
@backend_options
@click.pass_obj
def next_cmd(
    app: AppContext,
    release_file: str | None,
    backend: str | None,
    repository: str | None,
    token: str | None,
) -> None:
    """Show the tag the next release would get, without creating it."""
    from reltag.services.tagging import TagService

    opener = app.backend_factory(backend=backend, repository=repository, token=token)
    app.emit(TagService(app.settings, opener).next_tag(release_file))
