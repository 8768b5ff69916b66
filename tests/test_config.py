"""Tests for TreeConfig defaults and validation."""
import dataclasses

import pytest

from vtree.ui.config import TreeConfig
from vtree.ui.overscan import accessibility_overscan_indices
from vtree.ui.row import default_row_renderer


def test_defaults():
    cfg = TreeConfig()
    assert cfg.node_nesting_multiplier == 10
    assert cfg.row_height == 22
    assert cfg.overscan_row_count == 10
    assert cfg.overscan_indices_getter is accessibility_overscan_indices
    assert cfg.row_renderer is default_row_renderer
    assert cfg.no_rows_renderer() is None
    assert cfg.scroll_to_alignment == "auto"
    assert cfg.scroll_to_index == -1
    assert cfg.row_style == {}
    assert cfg.mouse_handlers() == {
        "on_row_click": None,
        "on_row_double_click": None,
        "on_row_mouse_out": None,
        "on_row_mouse_over": None,
        "on_row_right_click": None,
    }


@pytest.mark.parametrize("kwargs, error", [
    ({"node_nesting_multiplier": -1}, ValueError),
    ({"overscan_row_count": 1.5}, ValueError),
    ({"row_height": 0}, ValueError),
    ({"row_height": True}, ValueError),
    ({"scroll_to_alignment": "top"}, ValueError),
    ({"scroll_to_index": -2}, ValueError),
    ({"row_renderer": "not callable"}, TypeError),
    ({"on_scroll": None}, TypeError),
    ({"on_row_click": 5}, TypeError),
])
def test_invalid_values_are_rejected(kwargs, error):
    with pytest.raises(error):
        TreeConfig(**kwargs)


def test_replace_validates():
    cfg = TreeConfig()
    taller = cfg.replace(row_height=30)
    assert taller.row_height == 30
    assert cfg.row_height == 22

    with pytest.raises(ValueError):
        cfg.replace(row_height=-1)
    with pytest.raises(TypeError):
        cfg.replace(bogus=1)


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        TreeConfig().row_height = 5
