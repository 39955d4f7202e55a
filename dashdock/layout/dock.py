"""
Dock instance - one dashboard's layout tree plus its maximize state.

The UI layer forwards structural edit requests (tab inserted, moved, closed,
region split or merged) to the dock; the dock applies them to its active
tree and emits ``layout_changed`` so the view can re-render.

Signals:
    layout_changed(dock): Emitted after any change of the active tree
    label_changed(dock, label): Emitted when the dashboard is renamed
    closed(dock): Emitted once when the dock is closed
"""
from typing import Optional, Sequence
from loguru import logger

from .area import (
    AreaNode, Orientation, Path, TabArea, WidgetRef,
    find_widget, iter_tab_areas_with_paths, iter_widgets, node_at,
)
from .edits import LayoutEditError, insert_widget, merge_region, move_widget, remove_widget, split_region
from .maximize import MaximizeController
from ..core.events import Signal


class DockInstance:
    """
    A named dashboard owning exactly one layout tree.

    Edits are refused while the dock is locked or maximized; in the latter
    case the active tree is the temporary single-widget view and editing it
    would silently diverge from the layout restored afterwards.
    """

    def __init__(self, label: str, root: Optional[AreaNode] = None, locked: bool = False,
                 split_sizes: Sequence[float] = (1.0, 1.0)):
        self._label = label
        self._split_sizes = tuple(split_sizes)
        self._root = root
        self._locked = locked
        self._closed = False

        self.layout_changed = Signal("LayoutChanged")
        self.label_changed = Signal("LabelChanged")
        self.closed = Signal("DockClosed")

        self.maximize = MaximizeController(lambda: self._root, self._swap_root)

    def __repr__(self) -> str:
        return f"DockInstance(label={self._label!r}, widgets={len(self.widgets())}, mode={self.maximize.mode.value})"

    # === Properties ===

    @property
    def label(self) -> str:
        return self._label

    @property
    def root(self) -> Optional[AreaNode]:
        """The active layout tree (the single-widget view while maximized)."""
        return self._root

    @property
    def is_empty(self) -> bool:
        return self._root is None

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def locked(self) -> bool:
        return self._locked

    @locked.setter
    def locked(self, value: bool) -> None:
        if self._locked == value:
            return
        self._locked = value
        logger.debug(f"Dock '{self._label}' locked={value}")

    @property
    def is_maximized(self) -> bool:
        return self.maximize.is_maximized

    def widgets(self):
        """Widgets of the active tree in document order."""
        return list(iter_widgets(self._root))

    # === Whole-tree replacement ===

    def _swap_root(self, root: Optional[AreaNode]) -> None:
        self._root = root
        self.layout_changed.emit(self)

    def set_layout(self, root: Optional[AreaNode]) -> None:
        """Replace the whole layout, leaving any maximized view first."""
        self.maximize.unmaximize()
        self._swap_root(root)

    def toggle_maximize(self, widget: Optional[WidgetRef]) -> bool:
        return self.maximize.toggle_maximize(widget)

    def unmaximize(self) -> bool:
        return self.maximize.unmaximize()

    # === Structural edits ===

    def _can_edit(self, operation: str) -> bool:
        if self._closed:
            logger.warning(f"Dock '{self._label}' is closed, ignoring {operation}")
            return False
        if self._locked:
            logger.warning(f"Dock '{self._label}' is locked, ignoring {operation}")
            return False
        if self.is_maximized:
            logger.warning(f"Dock '{self._label}' is maximized, ignoring {operation}")
            return False
        return True

    def insert_widget(self, widget: WidgetRef, path: Path = (), index: Optional[int] = None) -> bool:
        """
        Insert a widget into the tab area at ``path`` (appended when ``index`` is None).
        """
        if not self._can_edit("insert"):
            return False
        try:
            root = insert_widget(self._root, path, index, widget)
        except LayoutEditError as e:
            logger.warning(f"Insert into '{self._label}' failed: {e}")
            return False
        self._swap_root(root)
        return True

    def add_widget(self, widget: WidgetRef) -> bool:
        """Append a widget to the first tab area, creating one if the dock is empty."""
        path = ()
        if self._root is not None:
            first = next(iter_tab_areas_with_paths(self._root), None)
            if first is None:
                logger.warning(f"Dock '{self._label}' has no tab area to add '{widget.title}' to")
                return False
            path = first[0]
        return self.insert_widget(widget, path)

    def move_widget(self, path: Path, from_index: int, to_index: int) -> bool:
        if not self._can_edit("move"):
            return False
        try:
            root = move_widget(self._root, path, from_index, to_index)
        except LayoutEditError as e:
            logger.warning(f"Move in '{self._label}' failed: {e}")
            return False
        self._swap_root(root)
        return True

    def remove_widget(self, path: Path, index: int) -> Optional[WidgetRef]:
        """
        Remove a widget, pruning regions left empty.

        Returns:
            The removed widget, or None if nothing was removed
        """
        if not self._can_edit("remove"):
            return None
        try:
            area = node_at(self._root, path)
            widget = area.widgets[index] if isinstance(area, TabArea) and 0 <= index < len(area.widgets) else None
            root = remove_widget(self._root, path, index)
        except LayoutEditError as e:
            logger.warning(f"Remove from '{self._label}' failed: {e}")
            return None
        self._swap_root(root)
        return widget

    def close_widget(self, widget: WidgetRef) -> bool:
        """Remove a widget wherever it is in the layout."""
        location = find_widget(self._root, widget)
        if location is None:
            logger.warning(f"Widget '{widget.title}' is not in dock '{self._label}'")
            return False
        path, index = location
        return self.remove_widget(path, index) is not None

    def split_region(self, path: Path, orientation: Orientation, widget: WidgetRef,
                     after: bool = True) -> Optional[Path]:
        """
        Put ``widget`` in a new tab area beside the region at ``path``.

        Returns:
            Path of the new tab area, or None if the split was refused
        """
        if not self._can_edit("split"):
            return None
        try:
            root, new_path = split_region(
                self._root, path, orientation, widget, after=after, sizes=self._split_sizes
            )
        except LayoutEditError as e:
            logger.warning(f"Split in '{self._label}' failed: {e}")
            return None
        self._swap_root(root)
        logger.info(f"Split region {path} of '{self._label}' {orientation.value} -> {new_path}")
        return new_path

    def merge_region(self, path: Path) -> bool:
        if not self._can_edit("merge"):
            return False
        try:
            root = merge_region(self._root, path)
        except LayoutEditError as e:
            logger.warning(f"Merge in '{self._label}' failed: {e}")
            return False
        self._swap_root(root)
        return True

    def clone_widget(self, source: WidgetRef, clone: WidgetRef) -> Optional[Path]:
        """Place ``clone`` in a new region to the right of the area holding ``source``."""
        location = find_widget(self._root, source)
        if location is None:
            logger.warning(f"Cannot clone '{source.title}': widget is not in dock '{self._label}'")
            return None
        path, _ = location
        return self.split_region(path, Orientation.HORIZONTAL, clone, after=True)

    # === Dashboard-level operations ===

    def rename(self, label: str) -> bool:
        """Rename the dashboard; empty labels are rejected."""
        if self._locked:
            logger.warning(f"Dock '{self._label}' is locked, ignoring rename")
            return False
        if not label:
            logger.warning("Ignoring empty dashboard label")
            return False
        self._label = label
        self.label_changed.emit(self, label)
        return True

    def close(self) -> None:
        """Release the layout and notify subscribers. Closing twice is a no-op."""
        if self._closed:
            return
        self.maximize.reset()
        self._root = None
        self._closed = True
        logger.debug(f"Dock closed: {self._label}")
        self.closed.emit(self)
