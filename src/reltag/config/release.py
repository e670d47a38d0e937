"""Release-line file loading.

The release line lives in a small JSON file committed to the repository::

    {"year": 2024, "update": "up1"}

A missing or malformed file is fatal: no tag may be produced without it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from reltag.config.models import ReleaseLine

logger = logging.getLogger(__name__)


class ReleaseConfigError(Exception):
    """The release-line file is missing or invalid."""

    def __init__(self, message: str, *, path: Path, missing: bool = False) -> None:
        super().__init__(message)
        self.path = path
        self.missing = missing


def load_release_line(path: Path) -> ReleaseLine:
    """Read and validate the release-line JSON file at *path*."""
    logger.debug("Reading config at %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"Release config not found: {path}"
        raise ReleaseConfigError(msg, path=path, missing=True) from exc
    except OSError as exc:
        msg = f"Cannot read release config {path}: {exc}"
        raise ReleaseConfigError(msg, path=path) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise ReleaseConfigError(msg, path=path) from exc

    try:
        release = ReleaseLine.model_validate(data)
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        msg = f"Invalid release config {path}: {errors}"
        raise ReleaseConfigError(msg, path=path) from exc

    logger.debug("Read config: %s", release.model_dump())
    return release
