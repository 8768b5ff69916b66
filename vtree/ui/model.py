'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Hashable, List, Set

from vtree.core.errors import ProtocolViolation
from vtree.core.registry import NodeRegistry
from vtree.core.source import NODE, TreeSource, classify, next_step, open_traversal

__all__ = ["flatten_tree"]


def flatten_tree(
        source: TreeSource,
        registry: NodeRegistry,
        refresh: bool = False,
        ignore_inner_state: bool = False,
) -> List[Hashable]:
    """
    Drive one traversal of `source` and return the visible identities in order.

    After each yield the source is told whether that node is open, which
    is how it decides to descend or move on. Descriptors register (or
    refresh) their record; with `ignore_inner_state` an existing record's
    openness is reset to the node's default. Identity references must
    name a registered node.

    Records touched before a ProtocolViolation stay registered; only the
    returned order is lost.
    """
    handle = open_traversal(source, refresh)
    order: List[Hashable] = []
    seen: Set[Hashable] = set()
    is_previous_opened = False

    while True:
        step = next_step(handle, is_previous_opened)
        if step.done:
            break

        kind, value = classify(step.value)

        if kind == NODE:
            identity = value.identity
            if identity in seen:
                raise ProtocolViolation(f"node {identity!r} yielded twice in one traversal")
            created = identity not in registry
            record = registry.get_or_create(value)
            if ignore_inner_state and not created:
                record.is_opened = value.is_opened_by_default
        else:
            identity = value
            if identity in seen:
                raise ProtocolViolation(f"node {identity!r} yielded twice in one traversal")
            record = registry.get(identity)
            if record is None:
                raise ProtocolViolation(f"identity reference to unregistered node {identity!r}")

        seen.add(identity)
        order.append(identity)
        is_previous_opened = record.is_opened

    return order
