"""Tag grammar — parsing and formatting of release tags.

Grammar (bit-exact)::

    v<year>.<marker><major>.<counter>
    v<year>.<marker><major>.<minor>.<counter>

``<marker>`` is a fixed two-letter literal (``up`` by default, ``sp`` for
service-pack style repositories).  Numbers are plain ASCII digit strings.

Parsing never raises: every failure is returned as a classified
:class:`Parsed` so callers can skip and log the offending text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from reltag.domain.versions import UpdateIdentifier, Version

TAG_PREFIX = "v"
DEFAULT_MARKER = "up"
MIN_YEAR = 2000
MAX_YEAR = 3000

_NUMBER = re.compile(r"[0-9]+")

T = TypeVar("T")


class InvalidReason(StrEnum):
    """Why a text was rejected by the grammar."""

    EMPTY = "empty"
    MISSING_PREFIX = "missing_prefix"
    SEGMENT_COUNT = "segment_count"
    BAD_YEAR = "bad_year"
    YEAR_OUT_OF_RANGE = "year_out_of_range"
    MISSING_MARKER = "missing_marker"
    BAD_UPDATE = "bad_update"
    BAD_COUNTER = "bad_counter"


@dataclass(frozen=True)
class Parsed(Generic[T]):
    """Tagged parse outcome: a value, or a reason the text was rejected."""

    text: str
    value: T | None = None
    reason: InvalidReason | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def success(cls, text: str, value: T) -> Parsed[T]:
        return cls(text=text, value=value)

    @classmethod
    def failure(cls, text: str, reason: InvalidReason, detail: str) -> Parsed[T]:
        return cls(text=text, reason=reason, detail=detail)


def _to_int(segment: str) -> int | None:
    if _NUMBER.fullmatch(segment) is None:
        return None
    try:
        return int(segment)
    except ValueError:
        # past the interpreter's int/str conversion digit limit
        return None


@dataclass(frozen=True)
class TagGrammar:
    """Parser and formatter for one marker/year-range configuration."""

    marker: str = DEFAULT_MARKER
    min_year: int = MIN_YEAR
    max_year: int = MAX_YEAR

    def parse_update(self, text: str) -> Parsed[UpdateIdentifier]:
        """Parse ``<marker><major>[.<minor>]``; minor defaults to 0."""
        if not text.startswith(self.marker):
            return Parsed.failure(
                text,
                InvalidReason.MISSING_MARKER,
                f"update must start with '{self.marker}'",
            )

        parts = text[len(self.marker) :].split(".")
        if len(parts) > 2:
            return Parsed.failure(
                text, InvalidReason.BAD_UPDATE, "update has at most a major and a minor"
            )

        numbers = [_to_int(p) for p in parts]
        if any(n is None for n in numbers):
            return Parsed.failure(
                text, InvalidReason.BAD_UPDATE, "update numbers must be non-negative integers"
            )

        major = numbers[0]
        minor = numbers[1] if len(numbers) == 2 else 0
        return Parsed.success(text, UpdateIdentifier(major=major, minor=minor))

    def parse_version(self, text: str | None) -> Parsed[Version]:
        """Parse a full tag name into a :class:`Version`."""
        if not text:
            return Parsed.failure(text or "", InvalidReason.EMPTY, "tag is empty")

        if not text.startswith(TAG_PREFIX):
            return Parsed.failure(
                text,
                InvalidReason.MISSING_PREFIX,
                f"tags should start with a lowercase '{TAG_PREFIX}'",
            )

        parts = text[len(TAG_PREFIX) :].split(".")
        if len(parts) not in (3, 4):
            return Parsed.failure(
                text,
                InvalidReason.SEGMENT_COUNT,
                "tags have three parts: a year, an update and a counter",
            )

        year = _to_int(parts[0])
        if year is None:
            return Parsed.failure(text, InvalidReason.BAD_YEAR, f"year '{parts[0]}' is not a number")
        if not self.min_year <= year <= self.max_year:
            return Parsed.failure(
                text,
                InvalidReason.YEAR_OUT_OF_RANGE,
                f"year {year} outside [{self.min_year}, {self.max_year}]",
            )

        update_text = ".".join(parts[1:-1])
        update = self.parse_update(update_text)
        if update.value is None:
            assert update.reason is not None
            return Parsed.failure(text, update.reason, update.detail)

        counter = _to_int(parts[-1])
        if counter is None:
            return Parsed.failure(
                text,
                InvalidReason.BAD_COUNTER,
                f"the counter should be a non-negative integer (was '{parts[-1]}')",
            )

        return Parsed.success(text, Version(year=year, update=update.value, counter=counter))

    def format_update(self, update: UpdateIdentifier) -> str:
        if update.minor:
            return f"{self.marker}{update.major}.{update.minor}"
        return f"{self.marker}{update.major}"

    def format_version(self, version: Version) -> str:
        """Inverse of :meth:`parse_version` (minor omitted when zero)."""
        return f"{TAG_PREFIX}{version.year}.{self.format_update(version.update)}.{version.counter}"


DEFAULT_GRAMMAR = TagGrammar()


def parse_update(text: str) -> Parsed[UpdateIdentifier]:
    return DEFAULT_GRAMMAR.parse_update(text)


def parse_version(text: str | None) -> Parsed[Version]:
    return DEFAULT_GRAMMAR.parse_version(text)


def format_version(version: Version) -> str:
    return DEFAULT_GRAMMAR.format_version(version)
