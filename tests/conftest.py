"""Pytest configuration and shared fixtures."""
import pytest

from vtree.core.source import NestedTreeSource
from vtree.ui.flat_tree import FlatTree


def node(identity, *children, open=False, **extra):
    """Nested-dict node in the shape NestedTreeSource walks."""
    data = {"id": identity, "name": identity, "open": open, "children": list(children)}
    data.update(extra)
    return data


def parent_map(roots):
    """identity -> parent identity for every node under `roots`."""
    parents = {}
    stack = [(root, None) for root in roots]
    while stack:
        current, parent = stack.pop()
        parents[current["id"]] = parent
        stack.extend((child, current["id"]) for child in current.get("children", []))
    return parents


def assert_valid_order(order, roots):
    """Each identity once; every node preceded by its parent."""
    assert len(order) == len(set(order))
    parents = parent_map(roots)
    position = {identity: i for i, identity in enumerate(order)}
    for identity in order:
        parent = parents[identity]
        if parent is not None:
            assert parent in position
            assert position[parent] < position[identity]


class CountingSource(NestedTreeSource):
    """NestedTreeSource that counts traversals and snapshots openness at their start."""

    def __init__(self, roots, watch=()):
        super().__init__(roots)
        self.traversals = 0
        self.tree = None
        self.watch = tuple(watch)
        self.snapshots = []

    def traverse(self, refresh=False):
        self.traversals += 1
        if self.tree is not None and self.watch:
            self.snapshots.append({
                identity: self.tree.is_opened(identity)
                for identity in self.watch if identity in self.tree.registry
            })
        return super().traverse(refresh)


@pytest.fixture
def scenario_roots():
    """Root R (closed) with two leaf children."""
    return [node("R", node("C1"), node("C2"))]


@pytest.fixture
def deep_roots():
    """
    A
    ├── A1
    │   ├── A1a
    │   └── A1b
    └── A2
    B
    └── B1
    """
    return [
        node("A", node("A1", node("A1a"), node("A1b")), node("A2")),
        node("B", node("B1")),
    ]


@pytest.fixture
def make_tree():
    def _make(roots, config=None, source_cls=NestedTreeSource):
        tree = FlatTree(source_cls(roots), config)
        tree.mount()
        return tree
    return _make


@pytest.fixture
def scenario_tree(make_tree, scenario_roots):
    return make_tree(scenario_roots)


@pytest.fixture
def deep_tree(make_tree, deep_roots):
    return make_tree(deep_roots)
