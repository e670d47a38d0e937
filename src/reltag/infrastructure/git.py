"""Local git backend.

Reads tags with ``git tag --list`` and creates lightweight tags with
``git tag <name> <sha>``, optionally pushing them to the configured remote.
Every subprocess failure (missing binary, non-repo directory, rejected
push) surfaces as :class:`BackendError`.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from reltag.config.models import GitConfig
from reltag.infrastructure.backends import BackendError

logger = logging.getLogger(__name__)


class GitTagBackend:
    """Tag source and ref writer for a local git checkout."""

    name = "git"

    def __init__(self, repo_root: Path, config: GitConfig | None = None) -> None:
        self._repo_root = repo_root
        self._config = config or GitConfig()

    def _run_git(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run a git command in the repository root. Raises on failure."""
        try:
            return subprocess.run(
                ["git", *args],
                cwd=self._repo_root,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            msg = f"git {args[0]} failed: {stderr or exc}"
            raise BackendError(msg) from exc
        except OSError as exc:
            raise BackendError(f"git {args[0]} failed: {exc}") from exc

    def list_tags(self) -> list[str]:
        result = self._run_git("tag", "--list")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def create_tag(self, tag: str, sha: str) -> None:
        """Tag *sha* locally, then push the tag if ``git.push`` is set.

        A rejected push deletes the local tag again before raising.
        """
        self._run_git("tag", tag, sha)
        if not self._config.push:
            return
        logger.info("Pushing new tag %s to %s", tag, self._config.remote)
        try:
            self._run_git("push", self._config.remote, f"refs/tags/{tag}")
        except BackendError:
            logger.warning("Push of %s failed, deleting local tag", tag)
            self._run_git("tag", "-d", tag)
            raise

    def close(self) -> None:
        """Nothing to release."""
