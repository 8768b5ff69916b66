# ui/flat_tree.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Sequence, Tuple

from vtree.core.errors import ProtocolViolation, UnknownIdentityError
from vtree.core.log import Log
from vtree.core.record import NodeRecord
from vtree.core.registry import NodeRegistry, RegistryView
from vtree.core.source import TreeSource
from vtree.core.types import RenderedSection, RowRendererParams, RowsRendered
from vtree.ui.config import TreeConfig
from vtree.ui.decorators import not_reentrant
from vtree.ui.model import flatten_tree
from vtree.ui.row import default_control_style, default_row_style


__all__ = ["FlatTree"]

OrderListener = Callable[[Tuple[Hashable, ...]], None]

class FlatTree:
    """
    Keeps a flat, index-addressable list of visible nodes in sync with a
    lazily walked tree source and the per-node openness state.

    The flat order only changes through recompute_tree(), which runs the
    source to completion and then publishes the new order in one go.
    Openness changes go through toggle_nodes() / toggle handles, each of
    which is followed by exactly one recomputation.
    """

    def __init__(self, source: TreeSource, config: Optional[TreeConfig] = None):
        self.source = source
        self.config = config if config is not None else TreeConfig()
        self._registry = NodeRegistry(self._handle_node_toggle)
        self._registry_view = RegistryView(self._registry)
        self._order: Tuple[Hashable, ...] = ()
        self._recomputing = False
        self._surface = None
        self._listeners: List[OrderListener] = []

    def is_recomputing(self) -> bool:
        return self._recomputing

    def mount(self) -> None:
        """Initial flattening: fresh traversal, every node at its default openness."""
        self.recompute_tree(True, True)

    # ------------------------------------------------------------------ #
    # Flat order access
    # ------------------------------------------------------------------ #

    @property
    def flat_order(self) -> Tuple[Hashable, ...]:
        return self._order

    @property
    def row_count(self) -> int:
        return len(self._order)

    def __len__(self) -> int:
        return len(self._order)

    @property
    def registry(self) -> RegistryView:
        return self._registry_view

    def record_at(self, index: int) -> NodeRecord:
        if not 0 <= index < len(self._order):
            raise IndexError(f"row index {index} out of range (0..{len(self._order) - 1})")
        return self._registry[self._order[index]]

    def find_row_index(self, identity: Hashable) -> Optional[int]:
        """Find row index for identity, or None when it is not visible."""
        for i, row_id in enumerate(self._order):
            if row_id == identity:
                return i
        return None

    def is_opened(self, identity: Hashable) -> bool:
        return self._registry[identity].is_opened

    def row_height(self, index: int) -> int:
        node = self.record_at(index).node
        return node.height or self.config.row_height

    def add_order_listener(self, listener: OrderListener) -> None:
        self._listeners.append(listener)

    def remove_order_listener(self, listener: OrderListener) -> None:
        self._listeners.remove(listener)

    # ------------------------------------------------------------------ #
    # Flattening
    # ------------------------------------------------------------------ #

    @not_reentrant
    def recompute_tree(self, refresh: bool = False, ignore_inner_state: bool = False) -> None:
        """
        Re-flatten the tree.

        refresh            – ask the source for a fresh traversal (full descriptors)
        ignore_inner_state – reset every node seen to its default openness

        On failure the previous flat order stays in effect.
        """
        self._recomputing = True
        try:
            order = flatten_tree(self.source, self._registry, refresh, ignore_inner_state)
        except ProtocolViolation as e:
            Log.debug(f"recompute_tree aborted, keeping {len(self._order)} rows: {e}", 0)
            raise
        finally:
            self._recomputing = False

        self._order = tuple(order)
        Log.debug(f"recompute_tree({refresh=}, {ignore_inner_state=}) -> {len(order)} rows", 2)
        self._publish()

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self._order)
        if self._surface is not None:
            self._surface.update(len(self._order))

    # ------------------------------------------------------------------ #
    # Openness
    # ------------------------------------------------------------------ #

    @not_reentrant
    def toggle_nodes(self, changes: Mapping[Hashable, bool]) -> None:
        """
        Set the openness of several nodes at once, then re-flatten once.
        Nothing is applied if any identity is unknown.
        """
        changes = dict(changes)
        try:
            self._registry.validate(changes)
        except UnknownIdentityError as e:
            Log.debug(f"toggle_nodes rejected: {e}", 0)
            raise

        for identity, value in changes.items():
            self._registry.set_openness(identity, value)

        Log.debug(f"toggle_nodes({len(changes)} changes)", 2)
        self.recompute_tree(refresh=True)

    def toggle_node(self, identity: Hashable) -> None:
        """Flip one node's openness through its bound toggle handle."""
        self._registry[identity].on_node_toggle()

    def expand_node(self, identity: Hashable) -> bool:
        """Open a single node. Returns True if it was closed."""
        if self.is_opened(identity):
            return False
        self.toggle_nodes({identity: True})
        return True

    def collapse_node(self, identity: Hashable) -> bool:
        """Close a single node. Returns True if it was open."""
        if not self.is_opened(identity):
            return False
        self.toggle_nodes({identity: False})
        return True

    def expand_all(self, max_passes: Optional[int] = None) -> int:
        """
        Open every visible closed parent, repeating while that reveals more.
        Returns the number of passes made; pass max_passes for very deep or
        unbounded trees.
        """
        passes = 0
        while max_passes is None or passes < max_passes:
            closed = [
                identity for identity in self._order
                if not self._registry[identity].is_opened
                and not self._registry[identity].node.is_leaf
            ]
            if not closed:
                break
            self.toggle_nodes({identity: True for identity in closed})
            passes += 1
        return passes

    @not_reentrant
    def _handle_node_toggle(self, record: NodeRecord) -> None:
        record.is_opened = not record.is_opened
        Log.debug(f"toggled {record.identity!r} -> {record.is_opened}", 2)
        self.recompute_tree(refresh=True)

    # ------------------------------------------------------------------ #
    # Render adapter
    # ------------------------------------------------------------------ #

    def row_params(
            self,
            row_index: int,
            style: Optional[Dict[str, Any]] = None,
            is_scrolling: bool = False,
            key: Optional[str] = None,
    ) -> RowRendererParams:
        """Bundle everything the row renderer needs for flat row `row_index`."""
        record = self.record_at(row_index)
        node = record.node
        cfg = self.config

        if style is None:
            style = {}
        if isinstance(style, dict):
            # Rows span the full surface width so they never flow under a scrollbar.
            style["width"] = "100%"

        row_style = {
            **style,
            **default_row_style,
            **cfg.row_style,
            **(node.style or {}),
            "height": node.height or cfg.row_height,
            "margin_left": node.nesting_level * cfg.node_nesting_multiplier,
            "overflow": "hidden",
        }

        return RowRendererParams(
            children_count=node.children_count,
            class_name=cfg.row_class_name,
            control_class_name=cfg.control_class_name,
            control_style={**default_control_style, **cfg.control_style},
            identity=node.identity,
            index=row_index,
            is_opened=record.is_opened,
            is_scrolling=is_scrolling,
            key=key if key is not None else f"{row_index}-0",
            nesting_level=node.nesting_level,
            node_data=node.node_data,
            on_node_toggle=record.on_node_toggle,
            style=row_style,
            **cfg.mouse_handlers(),
        )

    def cell_renderer(
            self,
            row_index: int,
            style: Optional[Dict[str, Any]] = None,
            is_scrolling: bool = False,
            key: Optional[str] = None,
    ) -> Any:
        """Render flat row `row_index` with the configured row renderer."""
        return self.config.row_renderer(self.row_params(row_index, style, is_scrolling, key))

    def render_rows(self, indices: Sequence[int]) -> List[Any]:
        return [self.cell_renderer(i) for i in indices]

    def on_section_rendered(self, section: RenderedSection) -> None:
        """Republish a surface's rendered-range change to on_rows_rendered."""
        self.config.on_rows_rendered(RowsRendered(
            overscan_start_index=section.row_overscan_start_index,
            overscan_stop_index=section.row_overscan_stop_index,
            start_index=section.row_start_index,
            stop_index=section.row_stop_index,
        ))

    # ------------------------------------------------------------------ #
    # Rendering surface
    # ------------------------------------------------------------------ #

    def attach(self, surface) -> None:
        self._surface = surface

    def detach(self) -> None:
        self._surface = None

    @property
    def surface(self):
        return self._surface

    def force_update_surface(self) -> None:
        if self._surface is not None:
            self._surface.force_update()

    def get_offset_for_row(self, index: int, alignment: Optional[str] = None) -> int:
        if self._surface is not None:
            return self._surface.get_offset_for_row(index, alignment or self.config.scroll_to_alignment)
        return 0

    def invalidate_cell_size_after_render(self, row_index: int) -> None:
        if self._surface is not None:
            self._surface.invalidate_cell_size_after_render(row_index)

    def measure_all_rows(self) -> None:
        if self._surface is not None:
            self._surface.measure_all_rows()

    def recompute_row_heights(self, index: int = 0) -> None:
        if self._surface is not None:
            self._surface.recompute_row_heights(index)

    recompute_grid_size = recompute_row_heights

    def scroll_to_position(self, scroll_top: int = 0) -> None:
        if self._surface is not None:
            self._surface.scroll_to_position(scroll_top)

    def scroll_to_row(self, index: int = 0, alignment: Optional[str] = None) -> None:
        if self._surface is not None:
            self._surface.scroll_to_row(index, alignment or self.config.scroll_to_alignment)

    def scroll_to_node(self, identity: Hashable, alignment: Optional[str] = None) -> bool:
        """Scroll a visible node into view. Returns False if it is not in the flat order."""
        idx = self.find_row_index(identity)
        if idx is None:
            return False
        self.scroll_to_row(idx, alignment)
        return True
