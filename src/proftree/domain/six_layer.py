"""6-layer (v2) schema: Domain → Industry → Profession → Field → Role → Task.

Layering::

    Domain        e.g. "STEM", "Arts", "Public Service"
    └ Industry    e.g. "Software", "Healthcare", "Finance"
      └ Profession  e.g. "Software Engineering", "Nursing"
        └ Field       e.g. "Backend", "Pediatrics"
          └ Role        e.g. "API Engineer", "Pediatric Nurse"
            └ Task        e.g. "Design REST endpoints", "Administer vaccine"

Every layer exposes typed aliases over the generic child API
(``add_role``/``remove_role``/``roles`` and so on) plus ``all_tasks``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from proftree.domain.nodes import CompositeNode, LayerFields, Leaf, RootAggregate
from proftree.domain.types import SchemaVersion


class NamedFields(LayerFields):
    name: str
    description: str | None = None


class TitledFields(LayerFields):
    title: str
    summary: str | None = None


class Task(Leaf):
    layer = "Task"
    fields_model = NamedFields


class Role(CompositeNode[Task]):
    layer = "Role"
    fields_model = TitledFields
    label_field = "title"
    child_type = Task

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self.children

    def add_task(self, attrs: Mapping[str, Any] | Task | None = None, /, **kwargs: Any) -> Task:
        return self.add_child(attrs, **kwargs)

    def remove_task(self, task: Task | str) -> Task:
        return self.remove_child(task)

    @property
    def all_tasks(self) -> list[Task]:
        return cast("list[Task]", self.all_leaves())


class Field(CompositeNode[Role]):
    layer = "Field"
    fields_model = NamedFields
    child_type = Role

    @property
    def roles(self) -> tuple[Role, ...]:
        return self.children

    def add_role(self, attrs: Mapping[str, Any] | Role | None = None, /, **kwargs: Any) -> Role:
        return self.add_child(attrs, **kwargs)

    def remove_role(self, role: Role | str) -> Role:
        return self.remove_child(role)

    @property
    def all_tasks(self) -> list[Task]:
        return cast("list[Task]", self.all_leaves())


class Profession(CompositeNode[Field]):
    layer = "Profession"
    fields_model = NamedFields
    child_type = Field

    @property
    def fields(self) -> tuple[Field, ...]:
        return self.children

    def add_field(self, attrs: Mapping[str, Any] | Field | None = None, /, **kwargs: Any) -> Field:
        return self.add_child(attrs, **kwargs)

    def remove_field(self, field: Field | str) -> Field:
        return self.remove_child(field)

    @property
    def all_tasks(self) -> list[Task]:
        return cast("list[Task]", self.all_leaves())


class Industry(CompositeNode[Profession]):
    layer = "Industry"
    fields_model = NamedFields
    child_type = Profession

    @property
    def professions(self) -> tuple[Profession, ...]:
        return self.children

    def add_profession(
        self, attrs: Mapping[str, Any] | Profession | None = None, /, **kwargs: Any
    ) -> Profession:
        return self.add_child(attrs, **kwargs)

    def remove_profession(self, profession: Profession | str) -> Profession:
        return self.remove_child(profession)

    @property
    def all_tasks(self) -> list[Task]:
        return cast("list[Task]", self.all_leaves())


class Domain(CompositeNode[Industry]):
    layer = "Domain"
    fields_model = NamedFields
    child_type = Industry

    @property
    def industries(self) -> tuple[Industry, ...]:
        return self.children

    def add_industry(
        self, attrs: Mapping[str, Any] | Industry | None = None, /, **kwargs: Any
    ) -> Industry:
        return self.add_child(attrs, **kwargs)

    def remove_industry(self, industry: Industry | str) -> Industry:
        return self.remove_child(industry)

    @property
    def all_tasks(self) -> list[Task]:
        return cast("list[Task]", self.all_leaves())


class Enterprise(RootAggregate[Domain]):
    """Root of a 6-layer tree."""

    schema_version = SchemaVersion.V2
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
    def all_tasks(self) -> list[Task]:
        return cast("list[Task]", self.all_leaves())
