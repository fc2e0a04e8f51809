"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PROFTREE_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``proftree.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from proftree.config.discovery import find_config, read_toml
from proftree.config.models import SnapshotConfig, TreeConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``proftree.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = read_toml(toml_path) if toml_path else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ProftreeSettings(BaseSettings):
    """Unified settings for the proftree CLI.

    Attributes:
        project_root: Directory relative snapshot paths resolve against
            (parent of ``proftree.toml``, or CWD if no config found).
        config_path: The config file in effect, or None.
        tree_path: Explicit ``--tree`` override of ``[tree] path``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PROFTREE_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    tree_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    tree: TreeConfig = Field(default_factory=TreeConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)

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

    @property
    def resolved_tree_path(self) -> Path:
        """The snapshot file commands operate on."""
        path = self.tree_path or Path(self.tree.path)
        if path.is_absolute():
            return path
        return self.project_root / path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> ProftreeSettings:
        """Construct settings from a CLI invocation.

        Discovers ``proftree.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides. Flags passed as
        None are treated as unset.

        An explicit *config_path* that does not exist, and values that fail
        validation, raise ClickException.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {toml_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        overrides = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **overrides,
            )
        except ValidationError as exc:
            source = toml_path or "environment"
            msg = f"Invalid config in {source}:\n{exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None
