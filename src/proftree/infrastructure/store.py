"""SnapshotStore — reads and writes tree snapshots on disk.

Snapshots are plain nested records, stored as JSON (stdlib) or YAML
(ruamel.yaml). The store is an interchange boundary only: the tree lives
in memory while a command runs and is written back when the command's
:meth:`SnapshotStore.transaction` block completes without raising.
"""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import contextmanager
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from proftree.domain.snapshot import export_tree, import_tree

if TYPE_CHECKING:
    from collections.abc import Iterator

    from proftree.domain.nodes import RootAggregate

log = structlog.get_logger(__name__)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class SnapshotFormatError(Exception):
    """The snapshot file could not be decoded."""


def resolve_format(path: Path, fmt: str = "auto") -> str:
    """Return ``"json"`` or ``"yaml"`` for *path*, honouring an explicit *fmt*."""
    if fmt != "auto":
        return fmt
    return "yaml" if path.suffix.lower() in _YAML_SUFFIXES else "json"


def _new_yaml(typ: str | None = None) -> YAML:
    y = YAML(typ=typ) if typ else YAML()
    y.default_flow_style = False
    return y


def dumps_snapshot(data: dict[str, Any], fmt: str, *, indent: int = 2) -> str:
    """Encode a snapshot record as JSON or YAML text."""
    if fmt == "yaml":
        buf = StringIO()
        _new_yaml().dump(data, buf)
        return buf.getvalue()
    return json.dumps(data, indent=indent or None, ensure_ascii=False) + "\n"


def loads_snapshot(text: str, fmt: str) -> Any:
    """Decode snapshot text. Raises :class:`SnapshotFormatError` on bad input."""
    try:
        if fmt == "yaml":
            return _new_yaml("safe").load(text)
        return json.loads(text)
    except (json.JSONDecodeError, YAMLError) as exc:
        msg = f"Could not decode {fmt} snapshot: {exc}"
        raise SnapshotFormatError(msg) from exc


class SnapshotStore:
    """File-backed home of one tree snapshot."""

    def __init__(self, path: Path, *, indent: int = 2, fmt: str = "auto") -> None:
        self.path = path
        self.indent = indent
        self.format = resolve_format(path, fmt)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Any:
        """Return the decoded snapshot record.

        Raises FileNotFoundError when the file does not exist and
        :class:`SnapshotFormatError` when it is not UTF-8 text.
        """
        raw = self.path.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"{self.path} is not UTF-8 text: {exc}"
            raise SnapshotFormatError(msg) from exc
        return loads_snapshot(text, self.format)

    def write(self, data: dict[str, Any]) -> None:
        """Replace the snapshot file atomically.

        The text goes to a temporary file beside the target, which then
        replaces it; an interrupted write leaves the old snapshot intact.
        """
        text = dumps_snapshot(data, self.format, indent=self.indent)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        log.debug("snapshot.write", path=str(self.path), format=self.format)

    def load(self) -> RootAggregate[Any]:
        root = import_tree(self.read())
        log.debug("snapshot.load", path=str(self.path), version=str(root.schema_version))
        return root

    def save(self, root: RootAggregate[Any]) -> None:
        self.write(export_tree(root))

    @contextmanager
    def transaction(self) -> Iterator[RootAggregate[Any]]:
        """Load the tree, yield it for mutation, and save it on success.

        If the block raises, nothing is written.
        """
        root = self.load()
        yield root
        self.save(root)
