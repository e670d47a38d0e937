"""Structured versions and their total order.

A tag such as ``v2024.up3.1.7`` parses into a :class:`Version` with
``year=2024``, ``update=UpdateIdentifier(major=3, minor=1)`` and
``counter=7``.

INVARIANT: ordering is lexicographic on (year, update.major, update.minor,
counter) and agrees with structural equality.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field


class UpdateIdentifier(BaseModel):
    """Service-pack/update component of a version (``up3`` or ``up3.1``)."""

    model_config = {"frozen": True}

    major: int = Field(ge=0)
    minor: int = Field(default=0, ge=0)


class Version(BaseModel):
    """One parsed, valid release tag."""

    model_config = {"frozen": True}

    year: int
    update: UpdateIdentifier
    counter: int = Field(ge=0)

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        return (self.year, self.update.major, self.update.minor, self.counter)

    def bump(self) -> Version:
        """Successor within the same release line."""
        return self.model_copy(update={"counter": self.counter + 1})


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as *a* sorts before, equal to, or after *b*."""
    ka, kb = a.sort_key, b.sort_key
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def sort_versions(versions: Iterable[Version]) -> list[Version]:
    """Ascending, stable sort consistent with :func:`compare_versions`."""
    return sorted(versions, key=lambda v: v.sort_key)
