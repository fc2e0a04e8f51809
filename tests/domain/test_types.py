"""Tests for the closed value sets."""

import pytest

from proftree.domain.types import AttributeType, SchemaVersion, Seniority


class TestSchemaVersion:
    def test_values(self) -> None:
        assert [str(v) for v in SchemaVersion] == ["v1", "v2"]

    def test_string_compare(self) -> None:
        assert SchemaVersion.V2 == "v2"

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            SchemaVersion("v3")


class TestAttributeType:
    def test_values(self) -> None:
        assert {str(v) for v in AttributeType} == {"Skill", "Tool", "Trait"}


class TestSeniority:
    def test_ordered_levels(self) -> None:
        assert [str(s) for s in Seniority] == [
            "Intern",
            "Junior",
            "Mid",
            "Senior",
            "Lead",
            "Principal",
        ]
