"""Tag backend contract and factory.

A backend is both the tag source (every existing tag name) and the ref
writer (create one new tag on a commit).  The domain layer never sees a
backend; services hand it already-materialized tag lists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from reltag.config.settings import ReltagSettings


class BackendError(Exception):
    """A tag backend could not list tags or create a ref."""


class TagBackend(Protocol):
    """Tag source plus ref writer for one repository."""

    name: str

    def list_tags(self) -> list[str]: ...

    def create_tag(self, tag: str, sha: str) -> None: ...

    def close(self) -> None: ...


def build_backend(
    settings: ReltagSettings,
    *,
    backend: str | None = None,
    repository: str | None = None,
    token: str | None = None,
) -> TagBackend:
    """Construct the configured backend.  Raises :class:`BackendError`."""
    kind = backend or settings.backend
    if kind == "github":
        from reltag.infrastructure.github import GitHubTagBackend

        if not repository:
            raise BackendError("Missing repository (use --repository or GITHUB_REPOSITORY).")
        return GitHubTagBackend(repository, token=token, config=settings.github)
    if kind == "git":
        from reltag.infrastructure.git import GitTagBackend

        return GitTagBackend(settings.root, config=settings.git)
    raise BackendError(f"Unknown backend: {kind}")
