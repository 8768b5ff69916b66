'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, Iterator, Optional

from vtree.core.errors import UnknownIdentityError
from vtree.core.record import NodeRecord
from vtree.core.types import NodeDescriptor

__all__ = ["NodeRegistry", "RegistryView"]


class NodeRegistry:
    """
    Identity -> NodeRecord mapping.

    Records are created on first sight and never removed: a node that
    drops out of the flat order (e.g. under a collapsed parent) keeps its
    openness for when it comes back. Memory therefore grows with the
    number of distinct identities ever seen.
    """

    def __init__(self, on_toggle: Callable[[NodeRecord], None]) -> None:
        self._records: Dict[Hashable, NodeRecord] = {}
        self._on_toggle = on_toggle

    def get(self, identity: Hashable) -> Optional[NodeRecord]:
        return self._records.get(identity)

    def __getitem__(self, identity: Hashable) -> NodeRecord:
        try:
            return self._records[identity]
        except KeyError:
            raise UnknownIdentityError([identity]) from None

    def __contains__(self, identity: object) -> bool:
        return identity in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._records)

    def get_or_create(self, node: NodeDescriptor) -> NodeRecord:
        """Return the record for `node`, creating it with the node's default openness if new."""
        record = self._records.get(node.identity)
        if record is None:
            record = NodeRecord(node, node.is_opened_by_default, self._on_toggle)
            self._records[node.identity] = record
        else:
            record.node = node
        return record

    def missing(self, identities: Iterable[Hashable]) -> list:
        return [i for i in identities if i not in self._records]

    def validate(self, identities: Iterable[Hashable]) -> None:
        """Raise UnknownIdentityError naming every identity that is not registered."""
        missing = self.missing(identities)
        if missing:
            raise UnknownIdentityError(missing)

    def set_openness(self, identity: Hashable, value: bool) -> None:
        self[identity].is_opened = bool(value)


class RegistryView:
    """Read-only view of a NodeRegistry; openness changes go through the tree."""

    __slots__ = ("_registry",)

    def __init__(self, registry: NodeRegistry) -> None:
        self._registry = registry

    def get(self, identity: Hashable) -> Optional[NodeRecord]:
        return self._registry.get(identity)

    def __getitem__(self, identity: Hashable) -> NodeRecord:
        return self._registry[identity]

    def __contains__(self, identity: object) -> bool:
        return identity in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._registry)
