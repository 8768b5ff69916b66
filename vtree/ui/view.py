# ui/view.py

from __future__ import annotations

import wx
from typing import Any, Optional

from vtree.core.log import Log
from vtree.core.types import RenderedSection, RowRendererParams, ScrollEventData
from vtree.ui.constants import GUTTER_W, PADDING
from vtree.ui.index import LayoutIndex
from vtree.ui.overscan import SCROLL_BACKWARD, SCROLL_FORWARD
from vtree.ui.scroll import clamp_scroll_y, offset_for_row, visible_range

DEFAULT_BG_COLOR = wx.Colour(240, 240, 255)
EMPTY_TEXT_COLOR = wx.Colour(120, 120, 120)

# =============================================================================
class TreeView(wx.ScrolledWindow):
    """
    GraphicsContext-based windowed view of a FlatTree.

    Only rows in the visible + overscan range are handed to the row
    renderer. A renderer may return a string (drawn as text, indented by
    the row's margin) or a callable taking (gc, rect) that draws itself.
    """

    def __init__(self, parent: wx.Window, tree):
        super().__init__(parent, style=wx.BORDER_SIMPLE | wx.WANTS_CHARS)

        self.tree = tree
        self._index = LayoutIndex()
        self._row_count = 0
        self._sel = -1
        self._hover = -1
        self._section: Optional[RenderedSection] = None
        self._direction = SCROLL_FORWARD
        self._last_scroll_top = 0

        # appearance + scrolling
        self.SetBackgroundStyle(wx.BG_STYLE_PAINT)
        self.SetDoubleBuffered(True)
        self.SetBackgroundColour(DEFAULT_BG_COLOR)
        self.SetScrollRate(0, 1)

        self._font = self.GetFont()
        self._bold = wx.Font(
            self._font.GetPointSize(),
            self._font.GetFamily(),
            wx.FONTSTYLE_NORMAL,
            wx.FONTWEIGHT_BOLD,
        )

        # event bindings
        self.Bind(wx.EVT_PAINT, self._on_paint)
        self.Bind(wx.EVT_SIZE, self._on_size)
        self.Bind(wx.EVT_CHAR_HOOK, self._on_char)
        self.Bind(wx.EVT_LEFT_DOWN, self._on_left_down)
        self.Bind(wx.EVT_LEFT_DCLICK, self._on_left_dclick)
        self.Bind(wx.EVT_RIGHT_DOWN, self._on_right_down)
        self.Bind(wx.EVT_MOTION, self._on_motion)
        self.Bind(wx.EVT_LEAVE_WINDOW, self._on_leave)
        self.Bind(wx.EVT_SCROLLWIN, self._on_scroll)
        self.Bind(wx.EVT_MOUSEWHEEL, self._on_scroll)

        tree.attach(self)
        self.update(tree.row_count)

    # ------------------------------------------------------------------ #
    # RenderingSurface
    # ------------------------------------------------------------------ #

    def _scroll_top(self) -> int:
        _sx, sy = self.GetViewStart()
        return sy * self.GetScrollPixelsPerUnit()[1]

    def update(self, row_count: int) -> None:
        self._row_count = row_count
        self.measure_all_rows()
        self.SetVirtualSize((-1, self._index.content_height()))
        if self._sel >= row_count:
            self._sel = row_count - 1
        self.Refresh(False)

    def force_update(self) -> None:
        self.Refresh(False)

    def get_offset_for_row(self, index: int, alignment: str = "auto") -> int:
        ch = self.GetClientSize().height
        return offset_for_row(self._index, index, alignment, self._scroll_top(), ch)

    def scroll_to_row(self, index: int, alignment: str = "auto") -> None:
        self.scroll_to_position(self.get_offset_for_row(index, alignment))

    def scroll_to_position(self, scroll_top: int) -> None:
        ch = self.GetClientSize().height
        y = clamp_scroll_y(self._index, scroll_top, ch)
        self.Scroll(-1, y // self.GetScrollPixelsPerUnit()[1])
        self._after_scroll()

    def measure_all_rows(self) -> None:
        self._index.rebuild(self.tree.row_height(i) for i in range(self._row_count))

    def recompute_row_heights(self, index: int = 0) -> None:
        index = max(0, index)
        self._index.rebuild_from(index, (self.tree.row_height(i) for i in range(index, self._row_count)))
        self.SetVirtualSize((-1, self._index.content_height()))
        self.Refresh(False)

    def invalidate_cell_size_after_render(self, row_index: int) -> None:
        wx.CallAfter(self.recompute_row_heights, row_index)

    # ------------------------------------------------------------------ #
    # painting
    # ------------------------------------------------------------------ #

    def _on_paint(self, _evt):
        dc = wx.AutoBufferedPaintDC(self)
        gc = wx.GraphicsContext.Create(dc)
        if gc is None:
            return

        w, client_h = self.GetClientSize()
        gc.SetBrush(wx.Brush(self.GetBackgroundColour()))
        gc.SetPen(wx.TRANSPARENT_PEN)
        gc.DrawRectangle(0, 0, w, client_h)

        cfg = self.tree.config
        if self._row_count == 0:
            placeholder = cfg.no_rows_renderer()
            if placeholder:
                gc.SetFont(self._font, EMPTY_TEXT_COLOR)
                gc.DrawText(str(placeholder), PADDING, PADDING)
            return

        scroll_top = self._scroll_top()
        start, stop = visible_range(self._index, scroll_top, client_h)
        overscan_start, overscan_stop = cfg.overscan_indices_getter(
            self._row_count, cfg.overscan_row_count, self._direction, start, stop
        )

        for i in range(overscan_start, overscan_stop + 1):
            top = self._index.row_top(i) - scroll_top
            h = self._index.row_height(i)
            params = self.tree.row_params(i, {"top": top, "left": 0, "height": h, "width": w})
            result = cfg.row_renderer(params)
            if top + h <= 0 or top >= client_h:
                continue
            self._draw_row(gc, wx.Rect(0, top, w, h), params, result)

        section = RenderedSection(overscan_start, overscan_stop, start, stop)
        if section != self._section:
            self._section = section
            self.tree.on_section_rendered(section)

    def _draw_row(self, gc: wx.GraphicsContext, rect: wx.Rect, params: RowRendererParams, result: Any) -> None:
        gc.PushState()
        gc.Clip(rect.x, rect.y, rect.width, rect.height)

        if params.index == self._sel:
            sel = wx.SystemSettings.GetColour(wx.SYS_COLOUR_HIGHLIGHT)
            gc.SetBrush(wx.Brush(sel))
            gc.SetPen(wx.TRANSPARENT_PEN)
            gc.DrawRectangle(rect.x, rect.y, rect.width, rect.height)
            fg = wx.SystemSettings.GetColour(wx.SYS_COLOUR_HIGHLIGHTTEXT)
        else:
            fg = wx.SystemSettings.GetColour(wx.SYS_COLOUR_WINDOWTEXT)

        if callable(result):
            result(gc, rect)
        elif result is not None:
            text = str(result)
            gc.SetFont(self._font if params.is_leaf else self._bold, fg)
            _tw, th = gc.GetTextExtent(text)
            x0 = rect.x + PADDING + params.indentation
            gc.DrawText(text, x0, rect.y + max(0, (rect.height - th) / 2))

        gc.PopState()

    # ------------------------------------------------------------------ #
    # mouse / keyboard
    # ------------------------------------------------------------------ #

    def _row_at(self, ywin: int) -> int:
        """Map a window-Y coordinate to a row index, or -1 below the last row."""
        y = self._scroll_top() + int(ywin)
        if self._row_count == 0 or y < 0 or y >= self._index.content_height():
            return -1
        idx, _ = self._index.find_row_at_y(y)
        return idx

    @staticmethod
    def _caret_hit(params: RowRendererParams, x: int) -> bool:
        left = PADDING + params.indentation
        return left <= x < left + GUTTER_W

    def _fire(self, handler, idx: int, evt) -> None:
        if handler is None or not 0 <= idx < self._row_count:
            return
        handler(event=evt, node_data=self.tree.record_at(idx).node.node_data)

    def _change_selection(self, new_idx: int):
        if not (0 <= new_idx < self._row_count):
            new_idx = -1
        if self._sel == new_idx:
            return
        self._sel = new_idx
        self.Refresh(False)

    def _on_left_down(self, evt):
        idx = self._row_at(evt.GetY())
        if idx < 0:
            evt.Skip()
            return

        self.SetFocus()
        self._change_selection(idx)
        params = self.tree.row_params(idx)
        if not params.is_leaf and self._caret_hit(params, evt.GetX()):
            params.on_node_toggle()
            return
        self._fire(params.on_row_click, idx, evt)

    def _on_left_dclick(self, evt):
        idx = self._row_at(evt.GetY())
        self._fire(self.tree.config.on_row_double_click, idx, evt)

    def _on_right_down(self, evt):
        idx = self._row_at(evt.GetY())
        self._fire(self.tree.config.on_row_right_click, idx, evt)

    def _on_motion(self, evt):
        idx = self._row_at(evt.GetY())
        if idx != self._hover:
            self._fire(self.tree.config.on_row_mouse_out, self._hover, evt)
            self._hover = idx
            self._fire(self.tree.config.on_row_mouse_over, idx, evt)
        evt.Skip()

    def _on_leave(self, evt):
        self._fire(self.tree.config.on_row_mouse_out, self._hover, evt)
        self._hover = -1
        evt.Skip()

    def _on_char(self, evt):
        key = evt.GetKeyCode()
        if self._row_count == 0:
            evt.Skip()
            return

        if key == wx.WXK_DOWN:
            self._change_selection(min(self._sel + 1, self._row_count - 1))
            self.scroll_to_row(self._sel)
        elif key == wx.WXK_UP:
            self._change_selection(max(self._sel - 1, 0))
            self.scroll_to_row(self._sel)
        elif key in (wx.WXK_LEFT, wx.WXK_RIGHT, wx.WXK_SPACE) and self._sel >= 0:
            identity = self.tree.record_at(self._sel).identity
            if key == wx.WXK_LEFT:
                self.tree.collapse_node(identity)
            elif key == wx.WXK_RIGHT:
                self.tree.expand_node(identity)
            else:
                self.tree.toggle_node(identity)
        else:
            evt.Skip()

    def _on_size(self, evt):
        self.Refresh(False)
        evt.Skip()

    def _on_scroll(self, evt):
        evt.Skip()
        wx.CallAfter(self._after_scroll)

    def _after_scroll(self):
        top = self._scroll_top()
        if top == self._last_scroll_top:
            return
        self._direction = SCROLL_FORWARD if top > self._last_scroll_top else SCROLL_BACKWARD
        self._last_scroll_top = top
        Log.debug(f"scrolled to {top}", 3)
        self.tree.config.on_scroll(ScrollEventData(
            client_height=self.GetClientSize().height,
            scroll_height=self._index.content_height(),
            scroll_top=top,
        ))
        self.Refresh(False)
