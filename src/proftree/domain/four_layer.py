"""4-layer (v1) schema: Domain → Specialization → Role → Responsibility.

Domain, Specialization and Role also carry ``attributes``: Skill, Tool
and Trait facts about the node. They are not children and never appear
in leaf aggregation.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, Field

from proftree.domain.errors import NotFoundError
from proftree.domain.nodes import CompositeNode, LayerFields, Leaf, RootAggregate
from proftree.domain.types import AttributeType, SchemaVersion, Seniority


class Attribute(BaseModel):
    """A Skill/Tool/Trait fact attached to a node."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    type: AttributeType
    description: str = ""


# --- Scalar records ---


class DomainFields(LayerFields):
    name: str
    description: str = ""
    attributes: tuple[Attribute, ...] = Field(default_factory=tuple)


class SpecializationFields(LayerFields):
    name: str
    description: str | None = None
    focus: str | None = None
    attributes: tuple[Attribute, ...] = Field(default_factory=tuple)


class RoleFields(LayerFields):
    title: str
    summary: str | None = None
    seniority: Seniority | None = None
    attributes: tuple[Attribute, ...] = Field(default_factory=tuple)


class ResponsibilityFields(LayerFields):
    title: str
    description: str | None = None
    outcome: str | None = None


# --- Attribute side list ---


class AttributeCarrier:
    """Mixin for layers that hold an ``attributes`` side list."""

    def add_attribute(
        self, attrs: Mapping[str, Any] | Attribute | None = None, /, **kwargs: Any
    ) -> Attribute:
        """Append an attribute; validation failures leave the list unchanged."""
        node = cast(CompositeNode[Any], self)
        entry: Any = attrs if isinstance(attrs, Attribute) else {**(attrs or {}), **kwargs}
        node.update(attributes=[*node.attributes, entry])
        return cast(Attribute, node.attributes[-1])

    def remove_attribute(self, name: str) -> Attribute:
        """Remove the first attribute called *name*."""
        node = cast(CompositeNode[Any], self)
        current: tuple[Attribute, ...] = node.attributes
        for index, attribute in enumerate(current):
            if attribute.name == name:
                break
        else:
            msg = f"{node.layer} {node.id} has no attribute named {name!r}"
            raise NotFoundError(msg)
        node.update(attributes=[*current[:index], *current[index + 1 :]])
        return attribute


# --- Layers, leaf first ---


class Responsibility(Leaf):
    layer = "Responsibility"
    fields_model = ResponsibilityFields
    label_field = "title"


class Role(AttributeCarrier, CompositeNode[Responsibility]):
    layer = "Role"
    fields_model = RoleFields
    label_field = "title"
    child_type = Responsibility

    @property
    def responsibilities(self) -> tuple[Responsibility, ...]:
        return self.children

    def add_responsibility(
        self, attrs: Mapping[str, Any] | Responsibility | None = None, /, **kwargs: Any
    ) -> Responsibility:
        return self.add_child(attrs, **kwargs)

    def remove_responsibility(self, responsibility: Responsibility | str) -> Responsibility:
        return self.remove_child(responsibility)

    @property
    def all_responsibilities(self) -> list[Responsibility]:
        return cast("list[Responsibility]", self.all_leaves())


class Specialization(AttributeCarrier, CompositeNode[Role]):
    layer = "Specialization"
    fields_model = SpecializationFields
    child_type = Role

    @property
    def roles(self) -> tuple[Role, ...]:
        return self.children

    def add_role(self, attrs: Mapping[str, Any] | Role | None = None, /, **kwargs: Any) -> Role:
        return self.add_child(attrs, **kwargs)

    def remove_role(self, role: Role | str) -> Role:
        return self.remove_child(role)

    @property
    def all_responsibilities(self) -> list[Responsibility]:
        return cast("list[Responsibility]", self.all_leaves())


class Domain(AttributeCarrier, CompositeNode[Specialization]):
    layer = "Domain"
    fields_model = DomainFields
    child_type = Specialization

    @property
    def specializations(self) -> tuple[Specialization, ...]:
        return self.children

    def add_specialization(
        self, attrs: Mapping[str, Any] | Specialization | None = None, /, **kwargs: Any
    ) -> Specialization:
        return self.add_child(attrs, **kwargs)

    def remove_specialization(self, specialization: Specialization | str) -> Specialization:
        return self.remove_child(specialization)

    @property
    def all_responsibilities(self) -> list[Responsibility]:
        return cast("list[Responsibility]", self.all_leaves())


class Organization(RootAggregate[Domain]):
    """Root of a 4-layer tree."""

    schema_version = SchemaVersion.V1
    child_type = Domain

    @property
    def domains(self) -> tuple[Domain, ...]:
        return self.children

    def add_domain(
        self, attrs: Mapping[str, Any] | Domain | None = None, /, **kwargs: Any
    ) -> Domain:
        return self.add_child(attrs, **kwargs)

    def remove_domain(self, domain: Domain | str) -> Domain:
        return self.remove_child(domain)

    @property
    def all_responsibilities(self) -> list[Responsibility]:
        return cast("list[Responsibility]", self.all_leaves())
