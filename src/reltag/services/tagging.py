"""TagService — next-tag preview, tag creation, and tag classification.

Pipeline for ``create_tag``: PRECONDITIONS → CONFIG → LIST → RESOLVE → CREATE

INVARIANT: a fatal failure at any step returns one ``ok=False`` result and
no ref is created.  Invalid tags in history are warnings, never errors.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from reltag.config.release import ReleaseConfigError, load_release_line
from reltag.domain.resolver import Resolution, resolve
from reltag.infrastructure.backends import BackendError
from reltag.services.contracts import (
    CreateTagData,
    NextTagData,
    ParseTagsData,
    dump_validated,
)
from reltag.services.result import ServiceResult

if TYPE_CHECKING:
    from reltag.config.models import ReleaseLine
    from reltag.config.settings import ReltagSettings
    from reltag.infrastructure.backends import TagBackend

log = structlog.get_logger(__name__)


class TagService:
    """Resolves and creates release tags for one repository.

    The backend is opened lazily through *open_backend* so precondition
    and config failures never touch the network or the git binary.
    """

    def __init__(
        self,
        settings: ReltagSettings,
        open_backend: Callable[[], TagBackend] | None = None,
    ) -> None:
        self._settings = settings
        self._open_backend = open_backend
        self._grammar = settings.tag_grammar

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def next_tag(self, release_file: Path | str | None = None) -> ServiceResult:
        """Compute the next tag without creating it."""
        op = "next_tag"
        release = self._load_release(op, release_file)
        if isinstance(release, ServiceResult):
            return release
        backend = self._backend(op)
        if isinstance(backend, ServiceResult):
            return backend
        try:
            resolution = self._resolve(op, backend, release)
        finally:
            backend.close()
        if isinstance(resolution, ServiceResult):
            return resolution

        data = self._resolution_data(resolution, release)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(NextTagData, data),
            warnings=self._warnings(resolution),
        )

    def create_tag(
        self,
        release_file: Path | str | None = None,
        *,
        sha: str | None,
        ref: str | None,
    ) -> ServiceResult:
        """Resolve the next tag and create it on commit *sha*."""
        op = "create_tag"
        if not ref:
            return ServiceResult.failure(op, "MISSING_REF", "Missing GITHUB_REF.")
        if not sha:
            return ServiceResult.failure(op, "MISSING_SHA", "Missing GITHUB_SHA.")

        release = self._load_release(op, release_file)
        if isinstance(release, ServiceResult):
            return release
        backend = self._backend(op)
        if isinstance(backend, ServiceResult):
            return backend
        try:
            resolution = self._resolve(op, backend, release)
            if isinstance(resolution, ServiceResult):
                return resolution
            try:
                backend.create_tag(resolution.tag, sha)
            except BackendError as exc:
                log.info("tag.create_failed", tag=resolution.tag, sha=sha, error=str(exc))
                return ServiceResult.failure(
                    op, "CREATE_FAILED", str(exc), tag=resolution.tag, sha=sha
                )
        finally:
            backend.close()

        log.info("tag.created", tag=resolution.tag, sha=sha, backend=backend.name)
        data = self._resolution_data(resolution, release)
        data.update(sha=sha, ref=ref, backend=backend.name)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(CreateTagData, data),
            warnings=self._warnings(resolution),
        )

    def parse_tags(self, tags: Iterable[str]) -> ServiceResult:
        """Classify each text against the tag grammar."""
        op = "parse_tags"
        items: list[dict[str, Any]] = []
        for text in tags:
            parsed = self._grammar.parse_version(text)
            if parsed.value is None:
                items.append(
                    {
                        "text": text,
                        "valid": False,
                        "reason": str(parsed.reason),
                        "detail": parsed.detail,
                    }
                )
                continue
            version = parsed.value
            items.append(
                {
                    "text": text,
                    "valid": True,
                    "canonical": self._grammar.format_version(version),
                    "year": version.year,
                    "update": self._grammar.format_update(version.update),
                    "counter": version.counter,
                }
            )

        valid_count = sum(1 for item in items if item["valid"])
        data = {"count": len(items), "valid_count": valid_count, "items": items}
        validated = ParseTagsData.model_validate(data)
        warnings = [
            f"Invalid tag '{item.text}': {item.detail}" for item in validated.items if not item.valid
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data=validated.model_dump(mode="python"),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _load_release(
        self, op: str, release_file: Path | str | None
    ) -> ReleaseLine | ServiceResult:
        path = self._settings.resolve_path(release_file)
        try:
            release = load_release_line(path)
        except ReleaseConfigError as exc:
            code = "CONFIG_NOT_FOUND" if exc.missing else "CONFIG_INVALID"
            return ServiceResult.failure(op, code, str(exc), path=str(path))

        grammar = self._grammar
        if not grammar.min_year <= release.year <= grammar.max_year:
            msg = (
                f"Invalid release config {path}: year {release.year} outside "
                f"[{grammar.min_year}, {grammar.max_year}]"
            )
            return ServiceResult.failure(op, "CONFIG_INVALID", msg, path=str(path))

        log.debug("release.loaded", year=release.year, update=release.update, path=str(path))
        return release

    def _backend(self, op: str) -> TagBackend | ServiceResult:
        if self._open_backend is None:
            return ServiceResult.failure(op, "BACKEND_ERROR", "No tag backend configured.")
        try:
            return self._open_backend()
        except BackendError as exc:
            return ServiceResult.failure(op, "BACKEND_ERROR", str(exc))

    def _resolve(
        self, op: str, backend: TagBackend, release: ReleaseLine
    ) -> Resolution | ServiceResult:
        try:
            names = backend.list_tags()
        except BackendError as exc:
            log.info("tags.list_failed", backend=backend.name, error=str(exc))
            return ServiceResult.failure(op, "TAG_SOURCE_FAILED", str(exc))

        log.debug("tags.listed", backend=backend.name, count=len(names))
        resolution = resolve(names, release.year, release.update, grammar=self._grammar)
        log.info(
            "tag.resolved",
            tag=resolution.tag,
            latest=self._format_latest(resolution),
            invalid=len(resolution.invalid),
        )
        return resolution

    # ------------------------------------------------------------------
    # Payload helpers
    # ------------------------------------------------------------------

    def _format_latest(self, resolution: Resolution) -> str | None:
        if resolution.latest is None:
            return None
        return self._grammar.format_version(resolution.latest)

    def _resolution_data(self, resolution: Resolution, release: ReleaseLine) -> dict[str, Any]:
        return {
            "tag": resolution.tag,
            "year": release.year,
            "update": self._grammar.format_update(resolution.version.update),
            "counter": resolution.version.counter,
            "latest": self._format_latest(resolution),
            "bootstrapped": resolution.bootstrapped,
            "relevant": resolution.relevant,
            "invalid": [t.model_dump() for t in resolution.invalid],
        }

    @staticmethod
    def _warnings(resolution: Resolution) -> list[str]:
        warnings = list(resolution.warnings)
        warnings.extend(f"Invalid tag '{t.name}': {t.detail}" for t in resolution.invalid)
        return warnings
