'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Hashable, Iterable, Tuple

__all__ = [
    "TreeError",
    "ProtocolViolation",
    "UnknownIdentityError",
    "ReentrancyError",
]


class TreeError(Exception):
    """Base class for every error raised by the flattening engine."""


class ProtocolViolation(TreeError):
    """A tree source yielded something the traversal protocol does not allow."""


class UnknownIdentityError(TreeError, KeyError):
    """One or more identities were never registered."""

    def __init__(self, identities: Iterable[Hashable]):
        self.identities: Tuple[Hashable, ...] = tuple(identities)
        super().__init__(self.identities)

    def __str__(self) -> str:
        ids = ", ".join(repr(i) for i in self.identities)
        return f"unknown node identities: {ids}"


class ReentrancyError(TreeError, RuntimeError):
    """The tree was asked to flatten while a flattening was already running."""
