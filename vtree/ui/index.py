from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, List, Tuple

class LayoutIndex:
    """
    Per-build layout index of cumulative row offsets and heights.

    - offsets[i] == pixel Y of the top of row i in content coordinates.
    - heights[i] == pixel height of row i.
    - total_height == sum(heights).
    """

    __slots__ = ("offsets", "heights", "total_height")

    def __init__(self) -> None:
        self.offsets: List[int] = []
        self.heights: List[int] = []
        self.total_height: int = 0

    def __len__(self) -> int:
        return len(self.heights)

    def rebuild(self, heights: Iterable[int]) -> None:
        """
        Recompute offsets from scratch.

        This is O(N) and should be called after the flat order changes.
        """
        self.heights = [max(0, int(h)) for h in heights]
        self._reoffset(0)

    def rebuild_from(self, start: int, heights: Iterable[int]) -> None:
        """Replace heights of rows start.. and recompute the offsets below them."""
        start = max(0, min(start, len(self.heights)))
        self.heights[start:] = [max(0, int(h)) for h in heights]
        self._reoffset(start)

    def _reoffset(self, start: int) -> None:
        del self.offsets[start:]
        acc = self.offsets[-1] + self.heights[start - 1] if start > 0 else 0
        for ht in self.heights[start:]:
            self.offsets.append(acc)
            acc += ht
        self.total_height = acc

    def row_top(self, i: int) -> int:
        """Get the top Y coordinate of row i."""
        if 0 <= i < len(self.offsets):
            return self.offsets[i]
        return 0

    def row_height(self, i: int) -> int:
        """Get the height of row i."""
        if 0 <= i < len(self.heights):
            return self.heights[i]
        return 0

    def find_row_at_y(self, y: int) -> Tuple[int, int]:
        """
        Given a content Y (0 = very top), return: (row_index, y_into_row)

        If y is above first row, returns (0, y).
        If y is beyond end, returns (last_index, last_row_height-1) as a clamp.
        """
        if not self.offsets:
            return (-1, 0)

        i = bisect_right(self.offsets, y) - 1
        if i < 0:
            return (0, y)

        if y >= self.total_height:
            last = len(self.heights) - 1
            return (last, max(0, self.heights[last] - 1))

        return (i, y - self.offsets[i])

    def content_height(self) -> int:
        """Get the total content height."""
        return self.total_height
