"""Release lines — the family of tags sharing a year and an update."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from reltag.domain.grammar import DEFAULT_GRAMMAR, Parsed, TagGrammar
from reltag.domain.versions import UpdateIdentifier, Version


class ReleaseLineKey(BaseModel):
    """Target (year, update) pair derived from configuration."""

    model_config = {"frozen": True}

    year: int
    update: UpdateIdentifier

    def contains(self, version: Version) -> bool:
        return version.year == self.year and version.update == self.update


def to_release_line_key(
    update_text: str,
    grammar: TagGrammar = DEFAULT_GRAMMAR,
) -> Parsed[UpdateIdentifier]:
    """Normalize configured update text (``up3`` / ``up3.1``)."""
    return grammar.parse_update(update_text)


def filter_by_line(
    versions: Iterable[Version],
    year: int,
    key: UpdateIdentifier | None,
) -> list[Version]:
    """Keep versions of the (*year*, *key*) line, preserving input order.

    A ``None`` key means the configured update did not parse; the result is
    empty, which callers treat as "no matching line yet".
    """
    if key is None:
        return []
    line = ReleaseLineKey(year=year, update=key)
    return [v for v in versions if line.contains(v)]
