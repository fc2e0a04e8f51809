"""Locate and read ``proftree.toml``.

A taxonomy project is the directory holding the nearest ``proftree.toml``,
searched from the working directory upward. ``PROFTREE_CONFIG`` names a
file explicitly and turns the search off.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from proftree.config.models import ProftreeConfig

CONFIG_FILENAME = "proftree.toml"
CONFIG_ENV_VAR = "PROFTREE_CONFIG"


def config_candidates(start: Path | None = None) -> Iterator[Path]:
    """Yield every ``proftree.toml`` location from *start* (default: cwd) to ``/``."""
    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start*, or None.

    ``PROFTREE_CONFIG`` wins when set, even if it names a missing file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None
    return next((c for c in config_candidates(start) if c.is_file()), None)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*. Malformed TOML is reported as a ClickException."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> ProftreeConfig:
    """Load the ``[tree]`` and ``[snapshot]`` sections without env or CLI overrides.

    Falls back to ``find_config(cwd)`` when *path* is None and to the
    built-in defaults when no file exists.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return ProftreeConfig()

    try:
        return ProftreeConfig.model_validate(read_toml(path))
    except ValidationError as exc:
        msg = f"Invalid config in {path}:\n{exc}"
        raise click.ClickException(msg) from exc
