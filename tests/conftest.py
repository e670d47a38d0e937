"""Shared pytest fixtures and test helpers for reltag tests."""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from reltag.config.settings import ReltagSettings
from reltag.infrastructure.backends import BackendError


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CI-provided variables from leaking into CLI tests."""
    for name in (
        "GITHUB_SHA",
        "GITHUB_REF",
        "GITHUB_REPOSITORY",
        "GITHUB_TOKEN",
        "GITHUB_OUTPUT",
        "RELTAG_CONFIG",
        "RELTAG_BACKEND",
        "RELTAG_RELEASE_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() side effects from CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    reltag_logger = logging.getLogger("reltag")
    reltag_level = reltag_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    reltag_logger.setLevel(reltag_level)


@pytest.fixture
def settings(tmp_path: Path) -> ReltagSettings:
    """Settings rooted at an empty temp directory."""
    return ReltagSettings.from_cli(root=tmp_path)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Temporary git repository with one commit."""
    for args in (
        ["git", "init"],
        ["git", "config", "user.email", "test@test.com"],
        ["git", "config", "user.name", "Test"],
        ["git", "config", "commit.gpgsign", "false"],
        ["git", "config", "tag.gpgsign", "false"],
    ):
        subprocess.run(args, cwd=tmp_path, capture_output=True, check=True)
    (tmp_path / ".keep").write_text("", encoding="utf-8")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(["git", "commit", "-m", "init"], cwd=tmp_path, capture_output=True, check=True)
    return tmp_path


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_release(
    root: Path,
    year: Any = 2024,
    update: str = "up1",
    name: str = "release.json",
) -> Path:
    """Write a release-line JSON file under *root*."""
    path = root / name
    path.write_text(json.dumps({"year": year, "update": update}), encoding="utf-8")
    return path


def git_tags(root: Path, *names: str) -> None:
    """Create lightweight tags on HEAD."""
    for name in names:
        subprocess.run(["git", "tag", name], cwd=root, capture_output=True, check=True)


class FakeBackend:
    """In-memory tag backend recording created tags."""

    name = "fake"

    def __init__(
        self,
        tags: list[str] | None = None,
        *,
        fail_list: bool = False,
        fail_create: bool = False,
    ) -> None:
        self.tags = list(tags or [])
        self.created: list[tuple[str, str]] = []
        self.closed = False
        self._fail_list = fail_list
        self._fail_create = fail_create

    def list_tags(self) -> list[str]:
        if self._fail_list:
            raise BackendError("listing exploded")
        return list(self.tags)

    def create_tag(self, tag: str, sha: str) -> None:
        if self._fail_create:
            raise BackendError("ref already exists")
        self.created.append((tag, sha))
        self.tags.append(tag)

    def close(self) -> None:
        self.closed = True
