"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``RELTAG_*`` prefix
  3. TOML file    — ``reltag.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`reltag.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from reltag.config.discovery import find_config
from reltag.config.models import BackendName, GitConfig, GitHubConfig, GrammarConfig
from reltag.domain.grammar import TagGrammar


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``reltag.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ReltagSettings(BaseSettings):
    """Unified settings for the reltag CLI.

    Stored on the :class:`~reltag.commands._context.AppContext` at the CLI
    root level.

    Attributes:
        root: Repository directory (parent of ``reltag.toml``, or CWD if no
            config found).  Relative ``release_file`` paths resolve here.
        config_path: Discovered or explicit ``reltag.toml``, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "RELTAG_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Top-level TOML keys ---
    backend: BackendName = "github"
    release_file: Path = Path("release.json")

    # --- TOML sections ---
    grammar: GrammarConfig = Field(default_factory=GrammarConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    git: GitConfig = Field(default_factory=GitConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> ReltagSettings:
        """Construct settings from CLI invocation.

        Discovers ``reltag.toml`` via walk-up (or explicit *config_path*),
        resolves *root* from the config file's parent directory, and merges
        CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    @property
    def tag_grammar(self) -> TagGrammar:
        return TagGrammar(
            marker=self.grammar.marker,
            min_year=self.grammar.min_year,
            max_year=self.grammar.max_year,
        )

    def resolve_path(self, path: Path | str | None = None) -> Path:
        """Resolve *path* (default: ``release_file``) against ``root``."""
        p = Path(path) if path is not None else self.release_file
        return p if p.is_absolute() else self.root / p
