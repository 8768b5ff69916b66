'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Tuple

__all__ = [
    "SCROLL_FORWARD",
    "SCROLL_BACKWARD",
    "default_overscan_indices",
    "accessibility_overscan_indices",
]

SCROLL_FORWARD = 1
SCROLL_BACKWARD = -1


def default_overscan_indices(
        cell_count: int,
        overscan_cells_count: int,
        scroll_direction: int,
        start_index: int,
        stop_index: int,
) -> Tuple[int, int]:
    """Overscan only in the direction of travel."""
    if scroll_direction == SCROLL_FORWARD:
        return (max(0, start_index), min(cell_count - 1, stop_index + overscan_cells_count))
    return (max(0, start_index - overscan_cells_count), min(cell_count - 1, stop_index))


def accessibility_overscan_indices(
        cell_count: int,
        overscan_cells_count: int,
        scroll_direction: int,
        start_index: int,
        stop_index: int,
) -> Tuple[int, int]:
    """
    Like default_overscan_indices, but always keeps one extra row on the
    trailing side so keyboard focus can move out of the visible range.
    """
    overscan = max(1, overscan_cells_count)
    if scroll_direction == SCROLL_FORWARD:
        return (max(0, start_index - 1), min(cell_count - 1, stop_index + overscan))
    return (max(0, start_index - overscan), min(cell_count - 1, stop_index + 1))
