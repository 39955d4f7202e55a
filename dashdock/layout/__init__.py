"""
Layout - dock layout trees and everything that operates on them.

Provides:
- area: TabArea / SplitArea tree model and structural queries
- edits: insert/move/remove widgets, split/merge regions
- codec: document encode/decode with validation
- maximize: per-dock maximize/restore state machine
- dock: DockInstance tying a tree, its maximize state and change signals together
"""
from .area import (
    AreaNode,
    Orientation,
    SplitArea,
    TabArea,
    WidgetRef,
    find_widget,
    iter_tab_areas,
    iter_widgets,
    node_at,
)
from .edits import LayoutEditError, insert_widget, merge_region, move_widget, remove_widget, split_region
from .codec import (
    DOCUMENT_VERSION,
    DashboardEntry,
    deserialize_area,
    parse_document,
    serialize_area,
    serialize_document,
)
from .maximize import MaximizeController, MaximizeMode
from .dock import DockInstance

__all__ = [
    # Model
    "AreaNode",
    "Orientation",
    "SplitArea",
    "TabArea",
    "WidgetRef",
    "find_widget",
    "iter_tab_areas",
    "iter_widgets",
    "node_at",

    # Edits
    "LayoutEditError",
    "insert_widget",
    "merge_region",
    "move_widget",
    "remove_widget",
    "split_region",

    # Codec
    "DOCUMENT_VERSION",
    "DashboardEntry",
    "deserialize_area",
    "parse_document",
    "serialize_area",
    "serialize_document",

    # Maximize / dock
    "MaximizeController",
    "MaximizeMode",
    "DockInstance",
]
