"""Tests for ProftreeSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from proftree.config.settings import ProftreeSettings
from proftree.domain.types import SchemaVersion


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ProftreeSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.tree.default_version is SchemaVersion.V2
        assert settings.resolved_tree_path == tmp_path / "taxonomy.json"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ProftreeSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "proftree.toml").write_text(
            '[tree]\npath = "data/careers.yaml"\ndefault_version = "v1"\n[snapshot]\nindent = 4\n'
        )
        settings = ProftreeSettings.from_cli(project_root=tmp_path)
        assert settings.tree.default_version is SchemaVersion.V1
        assert settings.snapshot.indent == 4
        assert settings.snapshot.format == "auto"
        assert settings.resolved_tree_path == tmp_path / "data" / "careers.yaml"

    def test_project_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "proftree.toml").write_text("")
        nested = tmp_path / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = ProftreeSettings.from_cli()
        assert settings.project_root.resolve() == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[tree]\npath = "x.json"\n')
        settings = ProftreeSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.tree.path == "x.json"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "proftree.toml").write_text("[tree\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ProftreeSettings.from_cli(project_root=tmp_path)


class TestOverrides:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "proftree.toml").write_text('[tree]\ndefault_version = "v1"\n')
        monkeypatch.setenv("PROFTREE_TREE__DEFAULT_VERSION", "v2")
        settings = ProftreeSettings.from_cli(project_root=tmp_path)
        assert settings.tree.default_version is SchemaVersion.V2

    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = ProftreeSettings.from_cli(
            project_root=tmp_path, json_output=True, verbose=True, tree_path="other.yaml"
        )
        assert settings.json_output is True
        assert settings.verbose is True
        assert settings.resolved_tree_path == tmp_path / "other.yaml"

    def test_none_flags_ignored(self, tmp_path: Path) -> None:
        settings = ProftreeSettings.from_cli(project_root=tmp_path, quiet=None)
        assert settings.quiet is False

    def test_absolute_tree_path(self, tmp_path: Path) -> None:
        target = tmp_path / "abs.json"
        settings = ProftreeSettings.from_cli(project_root=tmp_path / "x", tree_path=str(target))
        assert settings.resolved_tree_path == target


class TestConfigErrors:
    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            ProftreeSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_value_in_toml(self, tmp_path: Path) -> None:
        (tmp_path / "proftree.toml").write_text('[tree]\ndefault_version = "v9"\n')
        with pytest.raises(click.ClickException, match="Invalid config in .*proftree.toml"):
            ProftreeSettings.from_cli(project_root=tmp_path)
