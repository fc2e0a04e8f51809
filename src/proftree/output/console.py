"""Rich theme and off-screen console for proftree output.

Renderers draw into a :class:`RenderBuffer` and hand back its text, so
``format_result() -> str`` stays a pure function. Rich drops color codes
on its own when stdout is not a terminal (tests, pipes).

Layers are colored by depth rather than by name: ``Domain`` is the same
color in v1 and v2, and whichever layer holds the leaves always uses
``pt.leaf``.
"""

from __future__ import annotations

from collections.abc import Sequence
from io import StringIO

from rich.console import Console
from rich.theme import Theme

# Deepest schema (v2) has six layers; the last is styled as a leaf.
_DEPTH_STYLES = ("bold magenta", "magenta", "bold cyan", "cyan", "bold blue")

PROFTREE_THEME = Theme(
    {
        "pt.ok": "bold green",
        "pt.error": "bold red",
        "pt.op": "bold cyan",
        "pt.key": "dim",
        "pt.id": "bold blue",
        "pt.label": "bold",
        "pt.layer": "magenta",
        "pt.leaf": "green",
        "pt.count": "yellow",
        **{f"pt.layer.{depth}": style for depth, style in enumerate(_DEPTH_STYLES, start=1)},
    }
)


def style_for_depth(depth: int, total: int) -> str:
    """Theme style for the layer at 1-based *depth* of a *total*-layer schema."""
    if depth == total:
        return "pt.leaf"
    if not 1 <= depth <= len(_DEPTH_STYLES):
        return "pt.layer"
    return f"pt.layer.{depth}"


def style_for_layer(layer: str, layers: Sequence[str]) -> str:
    """Theme style for *layer* given its schema's ordered *layers*."""
    if layer not in layers:
        return "pt.layer"
    return style_for_depth(layers.index(layer) + 1, len(layers))


class RenderBuffer:
    """A themed Rich console that writes to memory instead of a terminal."""

    def __init__(self, *, no_color: bool = False, width: int = 120) -> None:
        self._file = StringIO()
        self.console = Console(
            file=self._file,
            theme=PROFTREE_THEME,
            no_color=no_color,
            highlight=False,
            width=width,
        )

    def text(self) -> str:
        """Everything printed so far, without the trailing newline."""
        return self._file.getvalue().rstrip("\n")
