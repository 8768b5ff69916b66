'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, List, Optional, Protocol, Set, runtime_checkable

from vtree.core.log import Log
from vtree.core.types import RenderedSection, ScrollEventData
from vtree.ui.index import LayoutIndex
from vtree.ui.overscan import SCROLL_BACKWARD, SCROLL_FORWARD
from vtree.ui.scroll import clamp_scroll_y, offset_for_row, visible_range

__all__ = ["RenderingSurface", "WindowedSurface"]


@runtime_checkable
class RenderingSurface(Protocol):
    """What a FlatTree expects from whatever turns row indices into pixels."""

    def update(self, row_count: int) -> None: ...

    def force_update(self) -> None: ...

    def get_offset_for_row(self, index: int, alignment: str) -> int: ...

    def scroll_to_row(self, index: int, alignment: str) -> None: ...

    def scroll_to_position(self, scroll_top: int) -> None: ...

    def measure_all_rows(self) -> None: ...

    def recompute_row_heights(self, index: int = 0) -> None: ...

    def invalidate_cell_size_after_render(self, row_index: int) -> None: ...


class WindowedSurface:
    """
    Headless windowed surface: a viewport `height` pixels tall over the
    tree's rows. Only rows in the visible range plus overscan are passed
    to the tree's cell renderer; the results are kept in `rendered`.
    """

    def __init__(self, tree, height: int, width: Optional[int] = None) -> None:
        if height <= 0:
            raise ValueError(f"viewport height must be positive, got {height!r}")
        self.tree = tree
        self.height = int(height)
        self.width = width
        self.scroll_top = 0
        self.rendered: List[Any] = []
        self.section: Optional[RenderedSection] = None

        self._index = LayoutIndex()
        self._row_count = 0
        self._direction = SCROLL_FORWARD
        self._invalid_rows: Set[int] = set()
        self._initial_scroll_done = False

        tree.attach(self)
        self.update(tree.row_count)

    # ------------------------------------------------------------------ #
    # RenderingSurface
    # ------------------------------------------------------------------ #

    @property
    def row_count(self) -> int:
        return self._row_count

    @property
    def layout(self) -> LayoutIndex:
        return self._index

    def update(self, row_count: int) -> None:
        self._row_count = row_count
        self._invalid_rows.clear()
        self.measure_all_rows()
        self.scroll_top = clamp_scroll_y(self._index, self.scroll_top, self.height)
        self.render()

    def force_update(self) -> None:
        self.render()

    def get_offset_for_row(self, index: int, alignment: str = "auto") -> int:
        return offset_for_row(self._index, index, alignment, self.scroll_top, self.height)

    def scroll_to_row(self, index: int, alignment: str = "auto") -> None:
        self.scroll_to_position(self.get_offset_for_row(index, alignment))

    def scroll_to_position(self, scroll_top: int) -> None:
        new_top = clamp_scroll_y(self._index, scroll_top, self.height)
        if new_top == self.scroll_top:
            return

        self._direction = SCROLL_FORWARD if new_top > self.scroll_top else SCROLL_BACKWARD
        self.scroll_top = new_top
        self.tree.config.on_scroll(ScrollEventData(
            client_height=self.height,
            scroll_height=self._index.content_height(),
            scroll_top=new_top,
        ))
        self.render()

    def measure_all_rows(self) -> None:
        self._index.rebuild(self.tree.row_height(i) for i in range(self._row_count))

    def recompute_row_heights(self, index: int = 0) -> None:
        index = max(0, index)
        self._index.rebuild_from(index, (self.tree.row_height(i) for i in range(index, self._row_count)))
        self.render()

    def invalidate_cell_size_after_render(self, row_index: int) -> None:
        self._invalid_rows.add(row_index)

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    def resize(self, height: int, width: Optional[int] = None) -> None:
        if height <= 0:
            raise ValueError(f"viewport height must be positive, got {height!r}")
        self.height = int(height)
        if width is not None:
            self.width = width
        self.scroll_top = clamp_scroll_y(self._index, self.scroll_top, self.height)
        self.render()

    def render(self) -> List[Any]:
        """Materialise the visible + overscan rows and return what the renderer produced."""
        cfg = self.tree.config
        n = self._row_count

        if n == 0:
            placeholder = cfg.no_rows_renderer()
            self.rendered = [] if placeholder is None else [placeholder]
            self.section = None
            return self.rendered

        if not self._initial_scroll_done:
            self._initial_scroll_done = True
            if 0 <= cfg.scroll_to_index:
                offset = self.get_offset_for_row(cfg.scroll_to_index, cfg.scroll_to_alignment)
                if offset != self.scroll_top:
                    # scroll_to_position notifies on_scroll and renders the new window.
                    self.scroll_to_position(offset)
                    return self.rendered

        start, stop = visible_range(self._index, self.scroll_top, self.height)
        overscan_start, overscan_stop = cfg.overscan_indices_getter(
            n, cfg.overscan_row_count, self._direction, start, stop
        )

        rows = []
        for i in range(overscan_start, overscan_stop + 1):
            style = {
                "position": "absolute",
                "top": self._index.row_top(i),
                "left": 0,
                "height": self._index.row_height(i),
            }
            if self.width is not None:
                style["width"] = self.width
            rows.append(self.tree.cell_renderer(i, style, False, f"{i}-0"))
        self.rendered = rows

        if self._invalid_rows:
            # Re-measure from the first row whose size was invalidated during this pass.
            first = min(self._invalid_rows)
            self._invalid_rows.clear()
            self._index.rebuild_from(first, (self.tree.row_height(i) for i in range(first, n)))

        section = RenderedSection(overscan_start, overscan_stop, start, stop)
        if section != self.section:
            self.section = section
            Log.debug(f"rendered rows {start}..{stop} (overscan {overscan_start}..{overscan_stop})", 3)
            self.tree.on_section_rendered(section)

        return self.rendered
