"""Tests for the render adapter and the default row renderer."""
from types import MappingProxyType, SimpleNamespace

import pytest

from conftest import node
from vtree.core.types import RenderedSection, RowsRendered
from vtree.ui.config import TreeConfig
from vtree.ui.constants import GUTTER_W
from vtree.ui.row import default_row_renderer, format_rows, row_label


@pytest.fixture
def styled_roots():
    return [
        node("R", node("C", name="Child"), name="Root", open=True, style={"color": "blue"}, height=40),
    ]


@pytest.fixture
def config():
    return TreeConfig(
        node_nesting_multiplier=20,
        row_style={"color": "red", "display": "block"},
        control_style={"cursor": "default"},
        row_class_name="row",
        control_class_name="ctl",
    )


def test_params_carry_record_state(make_tree, styled_roots, config):
    tree = make_tree(styled_roots, config)
    params = tree.row_params(0)

    assert params.identity == "R"
    assert params.index == 0
    assert params.key == "0-0"
    assert params.children_count == 1
    assert params.nesting_level == 0
    assert params.is_opened is True
    assert params.is_scrolling is False
    assert params.node_data["name"] == "Root"
    assert params.class_name == "row"
    assert params.control_class_name == "ctl"
    assert params.on_node_toggle is tree.registry.get("R").on_node_toggle


def test_style_merge_order(make_tree, styled_roots, config):
    tree = make_tree(styled_roots, config)

    root = tree.row_params(0).style
    assert root["display"] == "block"
    assert root["align_items"] == "center"
    assert root["color"] == "blue"
    assert root["height"] == 40
    assert root["margin_left"] == 0
    assert root["overflow"] == "hidden"

    child = tree.row_params(1)
    assert child.style["color"] == "red"
    assert child.style["height"] == config.row_height
    assert child.style["margin_left"] == 20
    assert child.indentation == 20


def test_forced_keys_win_over_surface_style(make_tree, styled_roots):
    tree = make_tree(styled_roots)
    params = tree.row_params(1, {"top": 5, "height": 999, "overflow": "visible"})
    assert params.style["top"] == 5
    assert params.style["height"] == 22
    assert params.style["overflow"] == "hidden"


def test_surface_style_gets_full_width(make_tree, styled_roots):
    tree = make_tree(styled_roots)
    style = {"top": 5}
    params = tree.row_params(1, style, is_scrolling=True, key="k")
    assert style["width"] == "100%"
    assert params.style["width"] == "100%"
    assert params.is_scrolling is True
    assert params.key == "k"


def test_read_only_surface_style_is_left_alone(make_tree, styled_roots):
    tree = make_tree(styled_roots)
    params = tree.row_params(1, MappingProxyType({"top": 5}))
    assert params.style["top"] == 5
    assert "width" not in params.style


def test_control_style_merge(make_tree, styled_roots, config):
    tree = make_tree(styled_roots, config)
    assert tree.row_params(0).control_style == {"cursor": "default", "width": GUTTER_W}


def test_mouse_handlers_pass_through(make_tree, styled_roots):
    def clicked(event, node_data):
        return node_data

    tree = make_tree(styled_roots, TreeConfig(on_row_click=clicked))
    params = tree.row_params(0)
    assert params.on_row_click is clicked
    assert params.on_row_right_click is None


def test_cell_renderer_uses_configured_renderer(make_tree, styled_roots):
    tree = make_tree(styled_roots, TreeConfig(row_renderer=lambda p: (p.index, p.identity)))
    assert tree.cell_renderer(1) == (1, "C")
    assert tree.render_rows([0, 1]) == [(0, "R"), (1, "C")]
    with pytest.raises(IndexError):
        tree.cell_renderer(2)


def test_default_renderer_carets(make_tree, styled_roots):
    tree = make_tree(styled_roots)
    assert tree.cell_renderer(0) == "▼ Root"
    assert tree.cell_renderer(1) == "• Child"

    tree.toggle_node("R")
    assert tree.cell_renderer(0) == "▶ Root"


def test_format_rows_indents_by_level(make_tree, styled_roots):
    tree = make_tree(styled_roots)
    assert format_rows(tree) == ["▼ Root", "  • Child"]
    assert format_rows(tree, indent="--") == ["▼ Root", "--• Child"]


def test_row_label():
    assert row_label({"name": "n", "title": "t"}) == "n"
    assert row_label({"title": "t"}) == "t"
    assert row_label({"id": 3}) == "3"
    assert row_label(SimpleNamespace(name="obj")) == "obj"
    assert row_label(None) == ""
    assert row_label(12) == "12"


def test_section_rendered_is_republished(make_tree, styled_roots):
    seen = []
    tree = make_tree(styled_roots, TreeConfig(on_rows_rendered=seen.append))
    tree.on_section_rendered(RenderedSection(0, 14, 0, 4))
    assert seen == [RowsRendered(overscan_start_index=0, overscan_stop_index=14, start_index=0, stop_index=4)]


def test_default_renderer_for_empty_payload(make_tree):
    def source(refresh):
        yield {"id": "x", "childrenCount": 0, "nestingLevel": 0}

    tree = make_tree([], TreeConfig())
    tree.source = source
    tree.recompute_tree(True)
    assert default_row_renderer(tree.row_params(0)) == "•"
