"""Tests for ReltagSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from reltag.config.settings import ReltagSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ReltagSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.backend == "github"
        assert settings.release_file == Path("release.json")
        assert settings.grammar.marker == "up"
        assert settings.grammar.min_year == 2000
        assert settings.grammar.max_year == 3000
        assert settings.github.per_page == 100
        assert settings.git.push is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ReltagSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "reltag.toml").write_text(
            'backend = "git"\nrelease_file = "ci/release.json"\n[grammar]\nmarker = "sp"\n'
        )
        settings = ReltagSettings.from_cli(root=tmp_path)
        assert settings.backend == "git"
        assert settings.release_file == Path("ci/release.json")
        assert settings.grammar.marker == "sp"
        assert settings.grammar.max_year == 3000

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[git]\npush = false\n")
        settings = ReltagSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.git.push is False
        assert settings.config_path == custom

    def test_root_from_toml_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "reltag.toml").write_text("")
        subdir = tmp_path / "sub" / "deep"
        subdir.mkdir(parents=True)
        monkeypatch.chdir(subdir)
        settings = ReltagSettings.from_cli()
        assert settings.root == tmp_path.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "reltag.toml").write_text("backend = \n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ReltagSettings.from_cli(root=tmp_path)

    def test_invalid_marker_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "reltag.toml").write_text('[grammar]\nmarker = "update"\n')
        with pytest.raises(Exception):
            ReltagSettings.from_cli(root=tmp_path)

    def test_inverted_year_range_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "reltag.toml").write_text("[grammar]\nmin_year = 3000\nmax_year = 2000\n")
        with pytest.raises(Exception):
            ReltagSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = ReltagSettings.from_cli(root=tmp_path, json_output=True, quiet=True)
        assert settings.json_output is True
        assert settings.quiet is True

    def test_env_var_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "reltag.toml").write_text('backend = "github"\n')
        monkeypatch.setenv("RELTAG_BACKEND", "git")
        assert ReltagSettings.from_cli(root=tmp_path).backend == "git"

    def test_nested_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELTAG_GRAMMAR__MARKER", "sp")
        assert ReltagSettings.from_cli(root=tmp_path).grammar.marker == "sp"


class TestHelpers:
    def test_tag_grammar(self, tmp_path: Path) -> None:
        (tmp_path / "reltag.toml").write_text('[grammar]\nmarker = "sp"\nmin_year = 2010\n')
        grammar = ReltagSettings.from_cli(root=tmp_path).tag_grammar
        assert grammar.marker == "sp"
        assert grammar.min_year == 2010

    def test_resolve_path_relative(self, tmp_path: Path) -> None:
        settings = ReltagSettings.from_cli(root=tmp_path)
        assert settings.resolve_path() == tmp_path / "release.json"
        assert settings.resolve_path("ci/r.json") == tmp_path / "ci" / "r.json"

    def test_resolve_path_absolute(self, tmp_path: Path) -> None:
        settings = ReltagSettings.from_cli(root=tmp_path)
        target = tmp_path / "elsewhere.json"
        assert settings.resolve_path(target) == target
