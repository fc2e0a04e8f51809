"""Shared pytest fixtures and test helpers for proftree tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from proftree.domain.six_layer import Enterprise
from proftree.infrastructure.store import SnapshotStore
from proftree.services.tree import TreeService


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's own PROFTREE_* environment out of the tests."""
    for name in ("PROFTREE_CONFIG", "PROFTREE_TREE_PATH", "PROFTREE_TREE__PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore logger state after each test (the CLI reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pt = logging.getLogger("proftree")
    pt_handlers = pt.handlers[:]
    pt_level = pt.level
    pt_propagate = pt.propagate
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pt.handlers = pt_handlers
    pt.setLevel(pt_level)
    pt.propagate = pt_propagate
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def tree_path(tmp_path: Path) -> Path:
    return tmp_path / "taxonomy.json"


@pytest.fixture
def store(tree_path: Path) -> SnapshotStore:
    return SnapshotStore(tree_path)


@pytest.fixture
def service(store: SnapshotStore) -> TreeService:
    """TreeService over a freshly initialized v2 tree."""
    svc = TreeService(store)
    assert svc.init_tree("v2").ok
    return svc


@pytest.fixture
def v1_service(store: SnapshotStore) -> TreeService:
    """TreeService over a freshly initialized v1 tree."""
    svc = TreeService(store)
    assert svc.init_tree("v1").ok
    return svc


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI writes an isolated tree.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def add_node(
    service: TreeService,
    label: str,
    parent_id: str | None = None,
    **attrs: Any,
) -> str:
    """Add a node via TreeService, asserting success. Returns its id."""
    result = service.add_node(attrs, parent_id=parent_id, label=label)
    assert result.ok, result.error
    return str(result.data["id"])


def build_stem() -> Enterprise:
    """STEM → Software → Software Engineering → Backend → API Engineer → 2 tasks."""
    root = Enterprise.create()
    stem = root.add_domain(name="STEM")
    software = stem.add_industry(name="Software")
    engineering = software.add_profession(name="Software Engineering")
    backend = engineering.add_field(name="Backend")
    api = backend.add_role(title="API Engineer")
    api.add_task(name="Design REST endpoints")
    api.add_task(name="Implement authentication")
    return root
