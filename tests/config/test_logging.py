"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import structlog

from proftree import __version__
from proftree.config.logging import configure_logging


def _last_json_line(capfd: pytest.CaptureFixture[str]) -> dict[str, object]:
    return json.loads(capfd.readouterr().err.strip().splitlines()[-1])


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("proftree").level == logging.DEBUG

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("proftree").level == logging.WARNING

    def test_single_handler_on_proftree_logger(self) -> None:
        root_handlers = logging.getLogger().handlers[:]
        configure_logging()
        configure_logging()
        pt = logging.getLogger("proftree")
        assert len(pt.handlers) == 1
        assert pt.propagate is False
        assert logging.getLogger().handlers == root_handlers

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("proftree.test")
        log.warning("json test", answer=42)
        parsed = _last_json_line(capfd)
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["proftree"] == __version__
        assert str(parsed["timestamp"]).endswith("Z")

    def test_stdlib_records_rendered(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("proftree.services.tree").debug("plain %s", "message")
        parsed = _last_json_line(capfd)
        assert parsed["event"] == "plain message"
        assert parsed["logger"] == "proftree.services.tree"

    def test_tree_path_bound(self, tmp_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
        tree = tmp_path / "careers.yaml"
        configure_logging(verbose=True, log_json=True, tree_path=tree)
        logging.getLogger("proftree.services.tree").debug("loaded")
        assert _last_json_line(capfd)["tree"] == str(tree)

    def test_reconfigure_drops_previous_tree(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_json=True, tree_path=tmp_path / "a.json")
        configure_logging(log_json=True)
        structlog.get_logger("proftree.test").warning("unbound")
        assert "tree" not in _last_json_line(capfd)

    def test_console_mode(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=False, tree_path=Path("taxonomy.json"))
        structlog.get_logger("proftree.test").info("console line", nodes=3)
        err = capfd.readouterr().err
        assert "console line" in err
        assert "nodes=3" in err
        assert "tree=taxonomy.json" in err
