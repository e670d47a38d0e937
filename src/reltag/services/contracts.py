"""Typed payload contracts for service results.

These models validate operation payload shapes before they leave the
service layer so key regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class InvalidTagItem(BaseModel):
    name: str
    reason: str
    detail: str = ""


class NextTagData(BaseModel):
    """Payload contract for ``TagService.next_tag``."""

    tag: str
    year: int
    update: str
    counter: int
    latest: str | None
    bootstrapped: bool
    relevant: list[str]
    invalid: list[InvalidTagItem]


class CreateTagData(NextTagData):
    """Payload contract for ``TagService.create_tag``."""

    sha: str
    ref: str
    backend: str


class ParsedTagItem(BaseModel):
    """One classified tag text."""

    text: str
    valid: bool
    canonical: str | None = None
    year: int | None = None
    update: str | None = None
    counter: int | None = None
    reason: str | None = None
    detail: str = ""


class ParseTagsData(BaseModel):
    """Payload contract for ``TagService.parse_tags``."""

    count: int
    valid_count: int
    items: list[ParsedTagItem]
