"""
Workspace - the ordered collection of dashboards in one application.

The workspace is constructed and owned by the application; there is no
process-wide instance. It is the only place that crosses the persistence
boundary for whole-application state:

    document = workspace.serialize_workspace(serializer)
    json.dump(document, f)
    ...
    workspace.restore_workspace(json.load(f), deserializer)

Signals:
    dashboard_added(dock, index): Emitted after a dashboard is inserted
    dashboard_removed(dock): Emitted after a dashboard is closed and removed
    current_changed(previous_index, current_index): Emitted when selection changes
    restored(workspace): Emitted after a successful restore
"""
from typing import Any, Dict, Iterator, List, Optional
from loguru import logger

from .core.config import LayoutSettings
from .core.events import Signal
from .layout.area import AreaNode, TabArea
from .layout.codec import DashboardEntry, Deserializer, Serializer, parse_document, serialize_document
from .layout.dock import DockInstance


class Workspace:
    """
    Ordered set of dock instances, with tab-bar style selection.

    Usage:
        workspace = Workspace(config.data.layout)
        main = workspace.add_dashboard("Main")
        main.add_widget(WidgetRef("Sales", payload))
    """

    def __init__(self, settings: Optional[LayoutSettings] = None):
        self._settings = settings or LayoutSettings()
        self._docks: List[DockInstance] = []
        self._current_index = -1
        self._locked = self._settings.start_locked

        self.dashboard_added = Signal("DashboardAdded")
        self.dashboard_removed = Signal("DashboardRemoved")
        self.current_changed = Signal("CurrentChanged")
        self.restored = Signal("WorkspaceRestored")

    def __len__(self) -> int:
        return len(self._docks)

    def __iter__(self) -> Iterator[DockInstance]:
        return iter(list(self._docks))

    @property
    def dashboards(self) -> List[DockInstance]:
        """A copy of the dashboards in display order."""
        return list(self._docks)

    @property
    def labels(self) -> List[str]:
        return [dock.label for dock in self._docks]

    # === Selection ===

    @property
    def current_index(self) -> int:
        """Index of the selected dashboard, -1 when none is selected. Out-of-range values select none."""
        return self._current_index

    @current_index.setter
    def current_index(self, value: int) -> None:
        if not 0 <= value < len(self._docks):
            value = -1
        self._set_current(value)

    @property
    def current_dashboard(self) -> Optional[DockInstance]:
        if self._current_index < 0:
            return None
        return self._docks[self._current_index]

    def _set_current(self, index: int) -> None:
        previous = self._current_index
        self._current_index = index
        if previous != index:
            self.current_changed.emit(previous, index)

    # === Lock ===

    @property
    def locked(self) -> bool:
        return self._locked

    @locked.setter
    def locked(self, value: bool) -> None:
        if self._locked == value:
            return
        self._locked = value
        for dock in self._docks:
            dock.locked = value
        logger.info(f"Workspace {'locked' if value else 'unlocked'}")

    def toggle_lock(self) -> bool:
        self.locked = not self._locked
        return self._locked

    # === Dashboard management ===

    def add_dashboard(self, label: Optional[str] = None, root: Optional[AreaNode] = None) -> DockInstance:
        return self.insert_dashboard(len(self._docks), label, root)

    def insert_dashboard(self, index: int, label: Optional[str] = None,
                         root: Optional[AreaNode] = None) -> DockInstance:
        """Create a dashboard at ``index`` (clamped) and select it."""
        if label is None:
            label = self._settings.default_dashboard_label
        dock = DockInstance(label, root, locked=self._locked,
                             split_sizes=self._settings.default_split_sizes)
        index = max(0, min(index, len(self._docks)))
        self._docks.insert(index, dock)
        logger.info(f"Dashboard added: {dock.label} at {index}")
        self.dashboard_added.emit(dock, index)
        self._set_current(index)
        return dock

    def request_new_dashboard(self) -> DockInstance:
        """Append a default-labelled dashboard seeded with an empty tab area."""
        return self.add_dashboard(root=TabArea())

    def close_dashboard(self, dock: DockInstance) -> bool:
        """Close and remove a dashboard; the selection moves to a neighbour."""
        if dock not in self._docks:
            logger.warning(f"Dashboard not in workspace: {dock.label}")
            return False

        index = self._docks.index(dock)
        self._docks.pop(index)
        dock.close()
        logger.info(f"Dashboard closed: {dock.label}")
        self.dashboard_removed.emit(dock)

        if not self._docks:
            self._set_current(-1)
        elif index < self._current_index or self._current_index >= len(self._docks):
            self._set_current(self._current_index - 1)
        elif index == self._current_index:
            # Same index now names the next dashboard.
            self.current_changed.emit(index, index)
        return True

    def move_dashboard(self, from_index: int, to_index: int) -> bool:
        count = len(self._docks)
        if not 0 <= from_index < count or not 0 <= to_index < count:
            logger.warning(f"Dashboard move {from_index} -> {to_index} out of range for {count}")
            return False
        current = self.current_dashboard
        dock = self._docks.pop(from_index)
        self._docks.insert(to_index, dock)
        if current is not None:
            self._set_current(self._docks.index(current))
        logger.debug(f"Dashboard moved: {dock.label} {from_index} -> {to_index}")
        return True

    def clear(self) -> None:
        """Close every dashboard."""
        docks, self._docks = self._docks, []
        previous, self._current_index = self._current_index, -1
        for dock in docks:
            dock.close()
            self.dashboard_removed.emit(dock)
        if previous != -1:
            self.current_changed.emit(previous, -1)

    # === Persistence ===

    def serialize_workspace(self, serializer: Serializer) -> Dict[str, Any]:
        """
        Encode every dashboard's active layout, in order, into a version-1 document.

        Does not modify the workspace.
        """
        entries = [DashboardEntry(label=dock.label, root=dock.root) for dock in self._docks]
        document = serialize_document(entries, serializer)
        logger.debug(f"Workspace serialized: {len(entries)} dashboards")
        return document

    def restore_workspace(self, document: Any, deserializer: Deserializer) -> bool:
        """
        Replace every dashboard with those described by ``document``.

        The whole document is validated and decoded before any existing
        dashboard is closed, so a rejected document (or a failing host
        deserializer) leaves the workspace untouched.

        Returns:
            True if the workspace was replaced
        """
        entries = parse_document(document, deserializer, self._settings.default_dashboard_label)
        if entries is None:
            logger.warning("Workspace restore aborted, keeping current dashboards")
            return False

        self.clear()
        for entry in entries:
            self.add_dashboard(entry.label, entry.root)
        if self._docks:
            self._set_current(0)

        logger.info(f"Workspace restored: {len(entries)} dashboards")
        self.restored.emit(self)
        return True
