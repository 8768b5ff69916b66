'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from vtree.core.types import RowRendererParams
from vtree.ui.constants import CARET_CLOSED, CARET_LEAF, CARET_OPEN, GUTTER_W

__all__ = [
    "default_row_style",
    "default_control_style",
    "caret_for",
    "row_label",
    "default_row_renderer",
    "format_rows",
]

default_row_style: Dict[str, Any] = {
    "display": "flex",
    "align_items": "center",
}

default_control_style: Dict[str, Any] = {
    "cursor": "pointer",
    "width": GUTTER_W,
}


def caret_for(params: RowRendererParams) -> str:
    if params.is_leaf:
        return CARET_LEAF
    return CARET_OPEN if params.is_opened else CARET_CLOSED


def row_label(node_data: Any) -> str:
    """Human-readable label for a payload: its name/title, else str()."""
    if isinstance(node_data, Mapping):
        for key in ("name", "title", "label"):
            if key in node_data:
                return str(node_data[key])
        if "id" in node_data:
            return str(node_data["id"])
        return ""
    if node_data is None:
        return ""
    return str(getattr(node_data, "name", node_data))


def default_row_renderer(params: RowRendererParams) -> str:
    """Caret glyph followed by the node label; indentation is left to the surface."""
    return f"{caret_for(params)} {row_label(params.node_data)}".rstrip()


def format_rows(tree, indent: str = "  ") -> List[str]:
    """Plain-text rendering of every row, indented by nesting level (used by --dump)."""
    lines = []
    for i in range(tree.row_count):
        params = tree.row_params(i)
        lines.append(f"{indent * params.nesting_level}{tree.config.row_renderer(params)}")
    return lines
