'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Callable, Hashable

from vtree.core.types import NodeDescriptor

__all__ = ["NodeRecord"]


class NodeRecord:
    """
    Persistent per-node state, owned by a NodeRegistry.

    `node` is replaced on every sighting; `is_opened` survives flattenings
    and only changes through a toggle or a reset. `on_node_toggle` is
    created once so renderers that compare callbacks see the same object
    for the whole lifetime of the record.
    """

    __slots__ = ("node", "is_opened", "on_node_toggle", "_on_toggle")

    def __init__(
            self,
            node: NodeDescriptor,
            is_opened: bool,
            on_toggle: Callable[["NodeRecord"], None],
    ) -> None:
        self.node = node
        self.is_opened = bool(is_opened)
        self._on_toggle = on_toggle
        self.on_node_toggle: Callable[[], None] = self._toggle

    @property
    def identity(self) -> Hashable:
        return self.node.identity

    def _toggle(self) -> None:
        # The owner flips `is_opened` so it can refuse while a flattening runs.
        self._on_toggle(self)

    def __repr__(self) -> str:
        state = "open" if self.is_opened else "closed"
        return f"NodeRecord({self.identity!r}, {state})"
