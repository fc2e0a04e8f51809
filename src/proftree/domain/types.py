"""Closed value sets used by the schemas.

Values match the labels used in exported snapshots.
"""

from __future__ import annotations

from enum import StrEnum


class SchemaVersion(StrEnum):
    """Supported tree shapes."""

    V1 = "v1"  # 4-layer
    V2 = "v2"  # 6-layer


class AttributeType(StrEnum):
    """Kinds of side facts attached to v1 nodes."""

    SKILL = "Skill"
    TOOL = "Tool"
    TRAIT = "Trait"


class Seniority(StrEnum):
    """Seniority levels for v1 roles."""

    INTERN = "Intern"
    JUNIOR = "Junior"
    MID = "Mid"
    SENIOR = "Senior"
    LEAD = "Lead"
    PRINCIPAL = "Principal"
