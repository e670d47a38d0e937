"""Command: create the next release tag on a commit."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reltag.commands._base import RelCommand, backend_options

if TYPE_CHECKING:
    from reltag.commands._context import AppContext


@click.command(
    cls=RelCommand,
    examples="""\
  reltag tag                                # inside GitHub Actions
  reltag tag --sha 1a2b3c4 --ref refs/heads/main --repository acme/widgets
  reltag tag --backend git --sha HEAD --ref main
  reltag -q tag --backend git --sha HEAD --ref main""",
)
@click.option("--sha", envvar="GITHUB_SHA", default=None, help="Commit to tag.")
@click.option("--ref", envvar="GITHUB_REF", default=None, help="Ref that triggered the run.")
@backend_options
@click.pass_obj
def tag(
    app: AppContext,
    sha: str | None,
    ref: str | None,
    release_file: str | None,
    backend: str | None,
    repository: str | None,
    token: str | None,
) -> None:
    """Resolve the next release tag and create it on SHA."""
    from reltag.infrastructure.actions import set_output
    from reltag.services.tagging import TagService

    opener = app.backend_factory(backend=backend, repository=repository, token=token)
    result = TagService(app.settings, opener).create_tag(release_file, sha=sha, ref=ref)
    if result.ok:
        set_output("tag", result.data["tag"])
    app.emit(result)
