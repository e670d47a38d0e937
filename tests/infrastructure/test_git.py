"""Tests for the local git backend against real temporary repositories."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from reltag.config.models import GitConfig
from reltag.infrastructure.backends import BackendError
from reltag.infrastructure.git import GitTagBackend
from tests.conftest import git_tags


def _head(root: Path) -> str:
    result = subprocess.run(
        ["git", "rev-parse", "HEAD"], cwd=root, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


class TestListTags:
    def test_no_tags(self, git_repo: Path) -> None:
        assert GitTagBackend(git_repo).list_tags() == []

    def test_lists_all(self, git_repo: Path) -> None:
        git_tags(git_repo, "v2024.up1.0", "v2024.up1.1", "garbage")
        tags = GitTagBackend(git_repo).list_tags()
        assert sorted(tags) == ["garbage", "v2024.up1.0", "v2024.up1.1"]

    def test_not_a_repository(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(BackendError, match="git tag failed"):
            GitTagBackend(plain).list_tags()


class TestCreateTag:
    def test_creates_local_tag_without_push(self, git_repo: Path) -> None:
        backend = GitTagBackend(git_repo, config=GitConfig(push=False))
        backend.create_tag("v2024.up1.0", _head(git_repo))
        assert backend.list_tags() == ["v2024.up1.0"]

    def test_duplicate_tag_fails(self, git_repo: Path) -> None:
        git_tags(git_repo, "v2024.up1.0")
        backend = GitTagBackend(git_repo, config=GitConfig(push=False))
        with pytest.raises(BackendError, match="already exists"):
            backend.create_tag("v2024.up1.0", _head(git_repo))

    def test_push_without_remote_fails(self, git_repo: Path) -> None:
        backend = GitTagBackend(git_repo, config=GitConfig(push=True, remote="origin"))
        with pytest.raises(BackendError, match="git push failed"):
            backend.create_tag("v2024.up1.0", _head(git_repo))
        assert backend.list_tags() == []

    def test_push_to_remote(self, git_repo: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
        remote = tmp_path_factory.mktemp("remote")
        subprocess.run(["git", "init", "--bare"], cwd=remote, capture_output=True, check=True)
        subprocess.run(
            ["git", "remote", "add", "origin", str(remote)],
            cwd=git_repo,
            capture_output=True,
            check=True,
        )
        backend = GitTagBackend(git_repo, config=GitConfig(push=True))
        backend.create_tag("v2024.up1.0", _head(git_repo))

        remote_tags = subprocess.run(
            ["git", "tag", "--list"], cwd=remote, capture_output=True, text=True, check=True
        )
        assert remote_tags.stdout.split() == ["v2024.up1.0"]
