"""Tests for the tree source protocol and the nested reference source."""
from types import SimpleNamespace

import pytest

from conftest import node
from vtree.core.errors import ProtocolViolation
from vtree.core.source import (
    NODE,
    REF,
    GeneratorHandle,
    NestedTreeSource,
    Step,
    classify,
    next_step,
    open_traversal,
)
from vtree.core.types import IdentityRef, NodeDescriptor
from vtree.ui.flat_tree import FlatTree


def test_generator_handle_primes_then_sends():
    seen = []

    def gen():
        seen.append((yield "a"))
        seen.append((yield "b"))

    handle = GeneratorHandle(gen())
    assert handle.resume(True) == Step(False, "a")
    assert handle.resume(True) == Step(False, "b")
    assert handle.resume(False) == Step(True)
    assert seen == [True, False]


class ListHandle:
    def __init__(self, items):
        self.items = list(items)

    def resume(self, previous_was_opened):
        if not self.items:
            return {"done": True}
        return {"done": False, "value": self.items.pop(0)}


class HandleSource:
    def traverse(self, refresh):
        return ListHandle([NodeDescriptor("a", 0, 0), NodeDescriptor("b", 0, 0)])


def test_explicit_handles_drive_the_engine():
    tree = FlatTree(HandleSource())
    tree.mount()
    assert tree.flat_order == ("a", "b")


def test_open_traversal_accepts_callables():
    def source(refresh):
        yield NodeDescriptor("only", 0, 0)

    handle = open_traversal(source, True)
    assert isinstance(handle, GeneratorHandle)
    assert next_step(handle, False).value.identity == "only"


def test_open_traversal_rejects_bad_sources():
    with pytest.raises(ProtocolViolation):
        open_traversal(lambda refresh: [1, 2], True)
    with pytest.raises(TypeError):
        open_traversal(42, True)


def test_next_step_rejects_odd_results():
    class Weird:
        def resume(self, previous_was_opened):
            return 42

    with pytest.raises(ProtocolViolation):
        next_step(Weird(), False)


def test_classify():
    desc = NodeDescriptor("d", 0, 0)
    assert classify(desc) == (NODE, desc)
    assert classify(IdentityRef("x")) == (REF, "x")
    assert classify("x") == (REF, "x")
    assert classify(("a", 1)) == (REF, ("a", 1))

    kind, value = classify({"id": "m", "children_count": 0, "nesting_level": 2})
    assert kind == NODE
    assert value == NodeDescriptor("m", 0, 2)

    for bad in ({"id": "m"}, [1], None, {"id": "m", "childrenCount": -1, "nestingLevel": 0}):
        with pytest.raises(ProtocolViolation):
            classify(bad)


def test_descriptor_validation():
    with pytest.raises(ValueError):
        NodeDescriptor("a", -1, 0)
    with pytest.raises(ValueError):
        NodeDescriptor("a", 0, "1")
    with pytest.raises(ValueError):
        NodeDescriptor("a", True, 0)
    with pytest.raises(ValueError):
        NodeDescriptor(None, 0, 0)
    with pytest.raises(TypeError):
        NodeDescriptor(["a"], 0, 0)
    with pytest.raises(ValueError):
        NodeDescriptor("a", 0, 0, height=0)
    assert NodeDescriptor("a", 0, 0).is_leaf


def test_descriptor_from_camel_case_mapping():
    desc = NodeDescriptor.from_mapping({
        "id": 7,
        "childrenCount": 2,
        "nestingLevel": 1,
        "isOpenedByDefault": 1,
        "nodeData": "payload",
        "height": 40,
        "style": {"color": "red"},
    })
    assert desc.identity == 7
    assert desc.is_opened_by_default is True
    assert desc.node_data == "payload"
    assert desc.height == 40
    assert desc.style == {"color": "red"}


def test_nested_source_only_descends_into_open_nodes():
    source = NestedTreeSource([node("R", node("C1", node("G")), node("C2"))])
    gen = source.traverse(False)

    root = next(gen)
    assert isinstance(root, NodeDescriptor)
    assert (root.identity, root.children_count, root.nesting_level) == ("R", 2, 0)

    c1 = gen.send(True)
    assert (c1.identity, c1.nesting_level) == ("C1", 1)
    c2 = gen.send(False)
    assert c2.identity == "C2"
    with pytest.raises(StopIteration):
        gen.send(False)


def test_nested_source_reaffirms_described_nodes():
    source = NestedTreeSource([node("R", node("C1"))])
    list(source.traverse(True))

    gen = source.traverse(False)
    assert next(gen) == "R"

    gen = source.traverse(True)
    assert isinstance(next(gen), NodeDescriptor)


def test_nested_source_set_roots_describes_again():
    source = NestedTreeSource([node("R")])
    list(source.traverse(False))
    source.set_roots([node("R"), node("S")])
    values = list(source.traverse(False))
    assert all(isinstance(v, NodeDescriptor) for v in values)
    assert [v.identity for v in values] == ["R", "S"]


def test_nested_source_reads_attributes():
    leaf = SimpleNamespace(id="leaf", name="Leaf", children=[])
    root = SimpleNamespace(id="root", name="Root", open=True, children=[leaf])
    tree = FlatTree(NestedTreeSource([root]))
    tree.mount()
    assert tree.flat_order == ("root", "leaf")
    assert tree.record_at(1).node.node_data is leaf


def test_nested_source_is_callable():
    source = NestedTreeSource([node("R")])
    tree = FlatTree(lambda refresh: source(refresh))
    tree.mount()
    assert tree.flat_order == ("R",)
