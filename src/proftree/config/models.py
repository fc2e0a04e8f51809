"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, proftree.toml only contains
overrides. A fresh project needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from proftree.domain.types import SchemaVersion

SnapshotFormat = Literal["auto", "json", "yaml"]


class TreeConfig(BaseModel):
    """[tree] section."""

    model_config = {"frozen": True}

    path: str = "taxonomy.json"
    default_version: SchemaVersion = SchemaVersion.V2


class SnapshotConfig(BaseModel):
    """[snapshot] section."""

    model_config = {"frozen": True}

    indent: int = Field(default=2, ge=0)
    format: SnapshotFormat = "auto"


class ProftreeConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    tree: TreeConfig = Field(default_factory=TreeConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
