'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Mapping, Optional

__all__ = [
    "NodeDescriptor",
    "IdentityRef",
    "RowRendererParams",
    "RowsRendered",
    "RenderedSection",
    "ScrollEventData",
]

# Accepted spellings for each descriptor field when a source yields a plain mapping.
_MAPPING_KEYS = {
    "identity": ("identity", "id"),
    "children_count": ("children_count", "childrenCount"),
    "nesting_level": ("nesting_level", "nestingLevel"),
    "is_opened_by_default": ("is_opened_by_default", "isOpenedByDefault"),
    "node_data": ("node_data", "nodeData"),
    "height": ("height",),
    "style": ("style",),
}

_REQUIRED = ("identity", "children_count", "nesting_level")


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(slots=True, frozen=True)
class NodeDescriptor:
    """
    One node as described by a tree source during a single traversal.

    • identity             – stable hashable key; equal keys mean "same node"
    • children_count       – number of direct children (0 ⇒ leaf)
    • nesting_level        – depth from the root (root = 0)
    • is_opened_by_default – openness used when the node is first seen or reset
    • node_data            – caller payload, handed back to the row renderer
    • height / style       – optional per-row size and style overrides
    """
    identity: Hashable
    children_count: int
    nesting_level: int
    is_opened_by_default: bool = False
    node_data: Any = None
    height: Optional[int] = None
    style: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if self.identity is None:
            raise ValueError("node identity must not be None")
        try:
            hash(self.identity)
        except TypeError as e:
            raise TypeError(f"node identity must be hashable, got {self.identity!r}") from e
        if not _is_count(self.children_count):
            raise ValueError(f"children_count must be a non-negative int, got {self.children_count!r}")
        if not _is_count(self.nesting_level):
            raise ValueError(f"nesting_level must be a non-negative int, got {self.nesting_level!r}")
        if self.height is not None and not (self.height > 0):
            raise ValueError(f"height override must be positive, got {self.height!r}")

    @property
    def is_leaf(self) -> bool:
        return self.children_count == 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NodeDescriptor":
        """Build a descriptor from a dict using either snake_case or camelCase keys."""
        kwargs: Dict[str, Any] = {}
        for field_name, keys in _MAPPING_KEYS.items():
            for key in keys:
                if key in data:
                    kwargs[field_name] = data[key]
                    break

        missing = [name for name in _REQUIRED if name not in kwargs]
        if missing:
            raise ValueError(f"node mapping is missing {', '.join(missing)}")

        kwargs["is_opened_by_default"] = bool(kwargs.get("is_opened_by_default", False))
        return cls(**kwargs)


@dataclass(slots=True, frozen=True)
class IdentityRef:
    """Explicit "re-affirm this known node" yield; bare hashable values mean the same thing."""
    identity: Hashable


@dataclass(slots=True)
class RowRendererParams:
    """Everything a row renderer needs to draw one materialised row."""
    children_count: int
    class_name: Optional[str]
    control_class_name: Optional[str]
    control_style: Dict[str, Any]
    identity: Hashable
    index: int
    is_opened: bool
    is_scrolling: bool
    key: str
    nesting_level: int
    node_data: Any
    on_node_toggle: Callable[[], None]
    style: Dict[str, Any]
    on_row_click: Optional[Callable[..., Any]] = None
    on_row_double_click: Optional[Callable[..., Any]] = None
    on_row_mouse_out: Optional[Callable[..., Any]] = None
    on_row_mouse_over: Optional[Callable[..., Any]] = None
    on_row_right_click: Optional[Callable[..., Any]] = None

    @property
    def is_leaf(self) -> bool:
        return self.children_count == 0

    @property
    def indentation(self) -> int:
        return int(self.style.get("margin_left", 0))


@dataclass(slots=True, frozen=True)
class RenderedSection:
    """Row range a surface just materialised, in surface terms."""
    row_overscan_start_index: int
    row_overscan_stop_index: int
    row_start_index: int
    row_stop_index: int


@dataclass(slots=True, frozen=True)
class RowsRendered:
    """Row range republished to `TreeConfig.on_rows_rendered`."""
    overscan_start_index: int
    overscan_stop_index: int
    start_index: int
    stop_index: int


@dataclass(slots=True, frozen=True)
class ScrollEventData:
    client_height: int
    scroll_height: int
    scroll_top: int
