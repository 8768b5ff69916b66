'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

Tree source protocol.

A tree source owns the hierarchical data and walks it on the engine's
behalf. The engine asks it for a traversal handle and resumes that handle
over and over, each time passing back whether the node yielded last is
open. The source uses that flag (and nothing else) to decide between
descending into the node's children and moving on to its next sibling.

Each resume yields one of:

    NodeDescriptor (or a mapping)   – a node, described in full
    IdentityRef / bare hashable     – an already-described node, by key only
    completion                      – the walk is over

A handle is either a native generator, driven with send(), or any object
with resume(previous_was_opened) returning a Step.
'''
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generator,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Set,
    Tuple,
    Union,
    runtime_checkable,
)

from vtree.core.errors import ProtocolViolation
from vtree.core.types import IdentityRef, NodeDescriptor

__all__ = [
    "Step",
    "ResumableHandle",
    "GeneratorHandle",
    "TreeSource",
    "NODE",
    "REF",
    "open_traversal",
    "classify",
    "NestedTreeSource",
]

NODE = "node"
REF = "ref"

Yielded = Union[NodeDescriptor, IdentityRef, Mapping[str, Any], Hashable]
TraversalGenerator = Generator[Yielded, bool, None]


@dataclass(slots=True, frozen=True)
class Step:
    done: bool
    value: Any = None


@runtime_checkable
class ResumableHandle(Protocol):
    def resume(self, previous_was_opened: bool) -> Step: ...


TreeSource = Union[Callable[[bool], Any], Any]


class GeneratorHandle:
    """Adapts a native generator to the resume() interface."""

    __slots__ = ("_gen", "_started")

    def __init__(self, gen: Generator) -> None:
        self._gen = gen
        self._started = False

    def resume(self, previous_was_opened: bool) -> Step:
        try:
            if not self._started:
                # The first resume only primes the generator; the flag has no node to refer to yet.
                self._started = True
                value = next(self._gen)
            else:
                value = self._gen.send(previous_was_opened)
        except StopIteration:
            return Step(True)
        return Step(False, value)

    def close(self) -> None:
        self._gen.close()


def _as_handle(obj: Any) -> ResumableHandle:
    if inspect.isgenerator(obj):
        return GeneratorHandle(obj)
    if isinstance(obj, ResumableHandle):
        return obj
    raise ProtocolViolation(
        f"tree source returned {type(obj).__name__}; expected a generator or a resumable handle"
    )


def open_traversal(source: TreeSource, refresh: bool) -> ResumableHandle:
    """Ask `source` for a traversal handle."""
    traverse = getattr(source, "traverse", None)
    if callable(traverse):
        return _as_handle(traverse(refresh))
    if callable(source):
        return _as_handle(source(refresh))
    raise TypeError(f"{type(source).__name__} is not a tree source")


def next_step(handle: ResumableHandle, previous_was_opened: bool) -> Step:
    """Resume `handle` and normalise whatever it returns into a Step."""
    step = handle.resume(previous_was_opened)
    if isinstance(step, Step):
        return step
    if isinstance(step, Mapping) and "done" in step:
        return Step(bool(step["done"]), step.get("value"))
    raise ProtocolViolation(f"handle.resume() returned {step!r}; expected a Step")


def classify(value: Any) -> Tuple[str, Any]:
    """
    Sort one yielded value into (NODE, NodeDescriptor) or (REF, identity).

    Raises ProtocolViolation for shapes that are neither.
    """
    if isinstance(value, NodeDescriptor):
        return NODE, value
    if isinstance(value, IdentityRef):
        return REF, value.identity
    if isinstance(value, Mapping):
        try:
            return NODE, NodeDescriptor.from_mapping(value)
        except (TypeError, ValueError) as e:
            raise ProtocolViolation(f"malformed node mapping {dict(value)!r}: {e}") from e
    if value is None:
        raise ProtocolViolation("tree source yielded None")
    try:
        hash(value)
    except TypeError:
        raise ProtocolViolation(f"tree source yielded unhashable {type(value).__name__}") from None
    return REF, value


# ---------------------------------------------------------------------------
# Reference source over nested dicts / objects.
# ---------------------------------------------------------------------------

def _field(node: Any, name: str, default: Any = None) -> Any:
    if isinstance(node, Mapping):
        return node.get(name, default)
    return getattr(node, name, default)


class NestedTreeSource:
    """
    Depth-first walker over nested nodes shaped like
    ``{"id": ..., "name": ..., "open": bool, "children": [...]}``
    (attribute access works too).

    With refresh=True every node is described in full. Otherwise nodes
    already described by this source are re-affirmed by identity only.
    Children of a node are only visited when the engine reports it open,
    so unopened subtrees are never touched.
    """

    def __init__(self, roots: Iterable[Any] = ()) -> None:
        self._roots: List[Any] = list(roots)
        self._described: Set[Hashable] = set()

    @property
    def roots(self) -> List[Any]:
        return self._roots

    def set_roots(self, roots: Iterable[Any]) -> None:
        """Swap in new data; the next traversal describes everything again."""
        self._roots = list(roots)
        self._described.clear()

    def describe(self, node: Any, nesting_level: int) -> NodeDescriptor:
        return NodeDescriptor(
            identity=_field(node, "id"),
            children_count=len(_field(node, "children") or ()),
            nesting_level=nesting_level,
            is_opened_by_default=bool(_field(node, "open", False)),
            node_data=node,
            height=_field(node, "height"),
            style=_field(node, "style"),
        )

    def traverse(self, refresh: bool = False) -> TraversalGenerator:
        if refresh:
            self._described.clear()

        stack: List[Tuple[Any, int]] = [(root, 0) for root in reversed(self._roots)]
        while stack:
            node, level = stack.pop()
            identity = _field(node, "id")

            if identity in self._described:
                is_opened = yield identity
            else:
                is_opened = yield self.describe(node, level)
                self._described.add(identity)

            children: Optional[list] = _field(node, "children")
            if children and is_opened:
                for child in reversed(children):
                    stack.append((child, level + 1))

    __call__ = traverse
