from __future__ import annotations

from typing import Tuple

from vtree.ui.index import LayoutIndex

def visible_range(index: LayoutIndex, scroll_top: int, client_height: int) -> Tuple[int, int]:
    """
    Return (first, last) row indices that are at least partially visible
    in a viewport of `client_height` pixels scrolled to `scroll_top`.
    (0, -1) when there is nothing to show.
    """
    n = len(index)
    if n <= 0 or client_height <= 0:
        return (0, -1)

    start_idx, y_into = index.find_row_at_y(max(0, scroll_top))
    if start_idx < 0:
        return (0, -1)

    y = -int(y_into)
    current_idx = int(start_idx)
    last = current_idx

    while current_idx < n and y < client_height:
        y += index.row_height(current_idx)
        last = current_idx
        current_idx += 1

    return (int(start_idx), min(last, n - 1))

def clamp_scroll_y(index: LayoutIndex, y: int, client_height: int) -> int:
    """Clamp pixel scroll position to [0 .. max_scroll]."""
    h = max(0, index.content_height() - client_height)
    return max(0, min(int(y), h))

def offset_for_row(
        index: LayoutIndex,
        row: int,
        alignment: str,
        current_offset: int,
        client_height: int,
) -> int:
    """
    Scroll offset that brings `row` into view.

    start  – row at the top
    end    – row at the bottom
    center – row in the middle
    auto   – keep current_offset if the row is already fully visible,
             otherwise scroll the least distance that shows it
    """
    n = len(index)
    if n <= 0:
        return 0
    row = max(0, min(row, n - 1))

    top = index.row_top(row)
    size = index.row_height(row)
    max_offset = top
    min_offset = top - client_height + size

    if alignment == "start":
        ideal = max_offset
    elif alignment == "end":
        ideal = min_offset
    elif alignment == "center":
        ideal = round(top - (client_height - size) / 2)
    else:
        ideal = max(min_offset, min(max_offset, current_offset))

    return clamp_scroll_y(index, ideal, client_height)
