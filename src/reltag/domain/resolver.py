"""Next-tag resolution for a release line.

Pipeline: PARSE → SORT → FILTER → PICK LATEST → BUMP → FORMAT

INVARIANT: a malformed tag anywhere in history never blocks tagging.
Invalid tags are dropped, logged, and reported on the :class:`Resolution`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from reltag.domain.grammar import DEFAULT_GRAMMAR, TagGrammar
from reltag.domain.release_line import filter_by_line, to_release_line_key
from reltag.domain.versions import UpdateIdentifier, Version, sort_versions

logger = logging.getLogger(__name__)


class InvalidTag(BaseModel):
    """A tag name rejected by the grammar."""

    model_config = {"frozen": True}

    name: str
    reason: str
    detail: str = ""


class Resolution(BaseModel):
    """Outcome of one resolution pass."""

    model_config = {"frozen": True}

    tag: str
    version: Version
    latest: Version | None = None
    valid: list[str] = Field(default_factory=list)
    relevant: list[str] = Field(default_factory=list)
    invalid: list[InvalidTag] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def bootstrapped(self) -> bool:
        """True when the release line had no prior tags."""
        return self.latest is None


def resolve(
    raw_tag_names: Iterable[str],
    year: int,
    update_text: str,
    *,
    grammar: TagGrammar = DEFAULT_GRAMMAR,
) -> Resolution:
    """Compute the next tag of the (*year*, *update_text*) release line."""
    warnings: list[str] = []

    key = to_release_line_key(update_text, grammar)
    if not key.ok:
        logger.warning("Invalid update %r: %s", update_text, key.detail)
        warnings.append(f"Invalid update '{update_text}': {key.detail}")
    else:
        logger.debug("Update: %s", key.value)

    # PARSE
    valid: list[Version] = []
    invalid: list[InvalidTag] = []
    for name in raw_tag_names:
        parsed = grammar.parse_version(name)
        if parsed.value is not None:
            valid.append(parsed.value)
        else:
            invalid.append(
                InvalidTag(name=name, reason=str(parsed.reason), detail=parsed.detail)
            )
    if invalid:
        logger.info("Invalid tags: %s", [t.name for t in invalid])

    # SORT + FILTER
    ordered = sort_versions(valid)
    relevant = filter_by_line(ordered, year, key.value)
    logger.debug("Relevant tags: %s", [grammar.format_version(v) for v in relevant])

    # PICK LATEST + BUMP
    latest = relevant[-1] if relevant else None
    if latest is not None:
        logger.info("Latest tag is %s", grammar.format_version(latest))
        new_version = latest.bump()
    else:
        logger.info("There is no tag with this configuration yet, creating one")
        update = key.value or UpdateIdentifier(major=0, minor=0)
        new_version = Version(year=year, update=update, counter=0)

    return Resolution(
        tag=grammar.format_version(new_version),
        version=new_version,
        latest=latest,
        valid=[grammar.format_version(v) for v in ordered],
        relevant=[grammar.format_version(v) for v in relevant],
        invalid=invalid,
        warnings=warnings,
    )


def resolve_next_tag(
    raw_tag_names: Iterable[str],
    year: int,
    update_text: str,
    *,
    grammar: TagGrammar = DEFAULT_GRAMMAR,
) -> str:
    """Shorthand for ``resolve(...).tag``."""
    return resolve(raw_tag_names, year, update_text, grammar=grammar).tag
