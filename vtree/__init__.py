'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from vtree.core.errors import ProtocolViolation, ReentrancyError, TreeError, UnknownIdentityError
from vtree.core.record import NodeRecord
from vtree.core.registry import NodeRegistry, RegistryView
from vtree.core.source import GeneratorHandle, NestedTreeSource, Step
from vtree.core.types import IdentityRef, NodeDescriptor, RowRendererParams, RowsRendered
from vtree.ui.config import TreeConfig
from vtree.ui.flat_tree import FlatTree
from vtree.ui.row import default_row_renderer
from vtree.ui.surface import RenderingSurface, WindowedSurface

__version__ = "0.1.0"

__all__ = [
    "FlatTree",
    "TreeConfig",
    "NodeDescriptor",
    "IdentityRef",
    "NodeRecord",
    "NodeRegistry",
    "RegistryView",
    "NestedTreeSource",
    "GeneratorHandle",
    "Step",
    "RowRendererParams",
    "RowsRendered",
    "RenderingSurface",
    "WindowedSurface",
    "default_row_renderer",
    "TreeError",
    "ProtocolViolation",
    "UnknownIdentityError",
    "ReentrancyError",
]
