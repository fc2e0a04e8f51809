"""Operation-specific Rich renderers for ServiceResult.

Each renderer draws onto the console of a :class:`RenderBuffer`; layer
names are colored with :func:`style_for_layer` so depth reads the same
in both schemas.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from proftree.output.console import RenderBuffer, style_for_depth, style_for_layer

if TYPE_CHECKING:
    from rich.console import Console

    from proftree.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    buffer = RenderBuffer()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, buffer.console, verbose=verbose)
    else:
        _render_error(result, buffer.console, verbose=verbose)

    return buffer.text()


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="pt.ok")
    op = Text(f"  {result.op}", style="pt.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pt.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="pt.id")
    elif key == "label":
        v = Text(str(value), style="pt.label")
    elif key == "layer":
        v = Text(str(value), style="pt.layer")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _layer_chain(layers: list[str]) -> Text:
    """``Domain → Industry → ...`` with each layer in its depth style."""
    chain = Text()
    for depth, layer in enumerate(layers, start=1):
        if depth > 1:
            chain.append(" → ")
        chain.append(layer, style=style_for_depth(depth, len(layers)))
    return chain


def _node_label(record: dict[str, Any], layer: str, style: str, *, verbose: bool) -> Text:
    name = record.get("name", record.get("title", "?"))
    text = Text.assemble((f"{layer}: ", style), (str(name), "pt.label"))
    if verbose:
        text.append(f"  [{record.get('id', '?')}]", style="dim")
    attributes = record.get("attributes") or []
    if attributes:
        facts = ", ".join(f"{a['name']} ({a['type']})" for a in attributes)
        text.append(f"  {facts}", style="dim")
    return text


def _add_branch(
    tree: Tree,
    record: dict[str, Any],
    layers: list[str],
    depth: int,
    offset: int,
    *,
    verbose: bool,
) -> None:
    """Add *record*'s children; *layers* starts at absolute depth ``offset + 1``."""
    total = offset + len(layers)
    for child in record.get("children", []):
        layer = layers[depth] if depth < len(layers) else "?"
        style = style_for_depth(offset + depth + 1, total)
        branch = tree.add(_node_label(child, layer, style, verbose=verbose))
        _add_branch(branch, child, layers, depth + 1, offset, verbose=verbose)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pt.error")
    op = Text(f"  {result.op}", style="pt.op")
    console.print(label, op, Text(" — "), msg, sep="")

    if err and err.detail.get("errors") and len(err.detail["errors"]) > 1:
        for line in err.detail["errors"]:
            console.print(f"    - {line}")
    elif verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render add/remove/update results."""
    _status_line(console, result)
    keys = (
        "id",
        "layer",
        "label",
        "parent_id",
        "fields_changed",
        "nodes_removed",
        "leaves_removed",
        "remaining_leaves",
    )
    for key in keys:
        if key in result.data and (result.data[key] is not None or verbose):
            _field(console, key, result.data[key])


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    _field(console, "version", result.data.get("version", ""))
    layers = result.data.get("layers", [])
    console.print(Text("  layers: ", style="pt.key"), _layer_chain(layers), sep="")


# ── Query renderers ───────────────────────────────────────────────────


def _render_node(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_node as a tree rooted at the requested node."""
    d = result.data
    record = d.get("node", {})
    layers = d.get("layers", [d.get("layer", "?")])
    offset = d.get("depth", 1) - 1
    style = style_for_depth(offset + 1, offset + len(layers))
    tree = Tree(_node_label(record, layers[0], style, verbose=True))
    _add_branch(tree, record, layers, 1, offset, verbose=verbose)
    console.print(tree)

    details = {
        k: v
        for k, v in record.items()
        if k not in ("id", "name", "title", "children", "attributes")
    }
    for key, value in details.items():
        _field(console, key, value)
    _field(console, "leaf_count", d.get("leaf_count", 0))


def _render_leaves(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Label", style="pt.label")
    table.add_column("Layer", style="pt.leaf")
    if verbose:
        table.add_column("ID", style="pt.id", no_wrap=True)
    for index, item in enumerate(items, start=1):
        row = [str(index), str(item.get("label", "")), str(item.get("layer", ""))]
        if verbose:
            row.append(str(item.get("id", "")))
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} leaves")


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    table = Table(title=f"Tree {d.get('version', '')}", show_header=True, expand=False)
    table.add_column("Layer")
    table.add_column("Nodes", style="pt.count", justify="right")
    counts = d.get("layers", {})
    for depth, (layer, count) in enumerate(counts.items(), start=1):
        table.add_row(Text(layer, style=style_for_depth(depth, len(counts))), str(count))
    console.print(table)
    _field(console, "total_nodes", d.get("total_nodes", 0))
    _field(console, "total_leaves", d.get("total_leaves", 0))


def _render_layers(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(Text(f"{d.get('version', '')}: {d.get('description', '')}", style="pt.op"))
    layers = d.get("layers", [])
    for depth, layer in enumerate(layers, start=1):
        style = style_for_depth(depth, len(layers))
        console.print(f"  {depth}. ", Text(layer, style=style), sep="")


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("version", "nodes", "leaves", "canonical"):
        if key in result.data:
            _field(console, key, result.data[key])


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "init_tree": _render_init,
    "add_node": _render_mutation,
    "remove_node": _render_mutation,
    "update_node": _render_mutation,
    "get_node": _render_node,
    "leaves": _render_leaves,
    "stats": _render_stats,
    "layers": _render_layers,
    "check": _render_check,
    "export_tree": _render_generic,
}
