'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Dict, Optional, Tuple

from vtree.core.types import RowRendererParams, RowsRendered, ScrollEventData
from vtree.ui.constants import (
    ALIGNMENTS,
    DEFAULT_ROW_H,
    NODE_NESTING_MULTIPLIER,
    OVERSCAN_ROW_COUNT,
)
from vtree.ui.overscan import accessibility_overscan_indices
from vtree.ui.row import default_row_renderer

__all__ = ["TreeConfig"]


def _no_rows() -> Any:
    return None


def _ignore(*_args, **_kwargs) -> None:
    return None


_CALLBACKS = (
    "overscan_indices_getter",
    "row_renderer",
    "no_rows_renderer",
    "on_rows_rendered",
    "on_scroll",
)

_MOUSE_HANDLERS = (
    "on_row_click",
    "on_row_double_click",
    "on_row_mouse_out",
    "on_row_mouse_over",
    "on_row_right_click",
)


@dataclass(frozen=True)
class TreeConfig:
    """
    Rendering options for a FlatTree. Every field has a working default;
    values are checked once, here, rather than at each render.
    """
    node_nesting_multiplier: int = NODE_NESTING_MULTIPLIER
    row_height: int = DEFAULT_ROW_H
    overscan_row_count: int = OVERSCAN_ROW_COUNT
    overscan_indices_getter: Callable[..., Tuple[int, int]] = accessibility_overscan_indices
    row_renderer: Callable[[RowRendererParams], Any] = default_row_renderer
    no_rows_renderer: Callable[[], Any] = _no_rows
    on_rows_rendered: Callable[[RowsRendered], None] = _ignore
    on_scroll: Callable[[ScrollEventData], None] = _ignore

    on_row_click: Optional[Callable[..., Any]] = None
    on_row_double_click: Optional[Callable[..., Any]] = None
    on_row_mouse_out: Optional[Callable[..., Any]] = None
    on_row_mouse_over: Optional[Callable[..., Any]] = None
    on_row_right_click: Optional[Callable[..., Any]] = None

    row_class_name: Optional[str] = None
    row_style: Dict[str, Any] = field(default_factory=dict)
    control_class_name: Optional[str] = None
    control_style: Dict[str, Any] = field(default_factory=dict)

    scroll_to_alignment: str = "auto"
    scroll_to_index: int = -1

    def __post_init__(self) -> None:
        for name in ("node_nesting_multiplier", "overscan_row_count"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative int, got {value!r}")

        if not isinstance(self.row_height, int) or isinstance(self.row_height, bool) or self.row_height <= 0:
            raise ValueError(f"row_height must be a positive int, got {self.row_height!r}")

        for name in _CALLBACKS:
            if not callable(getattr(self, name)):
                raise TypeError(f"{name} must be callable")

        for name in _MOUSE_HANDLERS:
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise TypeError(f"{name} must be callable or None")

        if self.scroll_to_alignment not in ALIGNMENTS:
            raise ValueError(
                f"scroll_to_alignment must be one of {', '.join(ALIGNMENTS)}, "
                f"got {self.scroll_to_alignment!r}"
            )

        if not isinstance(self.scroll_to_index, int) or self.scroll_to_index < -1:
            raise ValueError(f"scroll_to_index must be an int >= -1, got {self.scroll_to_index!r}")

    def replace(self, **changes: Any) -> "TreeConfig":
        """Validated copy with `changes` applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise TypeError(f"unknown TreeConfig fields: {', '.join(unknown)}")
        return replace(self, **changes)

    def mouse_handlers(self) -> Dict[str, Optional[Callable[..., Any]]]:
        return {name: getattr(self, name) for name in _MOUSE_HANDLERS}
