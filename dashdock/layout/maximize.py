"""
Maximize Controller - per-dock maximize/restore state machine.

Maximizing swaps the dock's active layout for a single tab area holding the
target widget and keeps the full layout aside; restoring swaps it back. The
saved layout is detached, never edited, so restore returns exactly the tree
that was active before.
"""
from enum import Enum
from typing import Callable, Optional
from loguru import logger

from .area import AreaNode, TabArea, WidgetRef, find_widget
from ..core.events import Signal


class MaximizeMode(Enum):
    """Maximize states."""
    NORMAL = "normal"
    MAXIMIZED = "maximized"


class MaximizeController:
    """
    Two-state machine owned by one dock instance.

    The controller does not hold the active layout itself. It reads and
    replaces it through the ``get_layout``/``set_layout`` callables supplied
    by its owner, so every transition is one reference swap on the owner.

    Usage:
        controller = MaximizeController(lambda: dock.root, dock._swap_root)
        controller.toggle_maximize(widget)   # NORMAL -> MAXIMIZED
        controller.toggle_maximize(None)     # MAXIMIZED -> NORMAL
    """

    VALID_TRANSITIONS = {
        MaximizeMode.NORMAL: [MaximizeMode.MAXIMIZED],
        MaximizeMode.MAXIMIZED: [MaximizeMode.NORMAL],
    }

    def __init__(self,
                 get_layout: Callable[[], Optional[AreaNode]],
                 set_layout: Callable[[Optional[AreaNode]], None]):
        self._get_layout = get_layout
        self._set_layout = set_layout
        self._mode = MaximizeMode.NORMAL
        self._saved_layout: Optional[AreaNode] = None
        self.changed = Signal("MaximizeChanged")

    @property
    def mode(self) -> MaximizeMode:
        return self._mode

    @property
    def is_maximized(self) -> bool:
        return self._mode == MaximizeMode.MAXIMIZED

    @property
    def saved_layout(self) -> Optional[AreaNode]:
        """The full layout kept aside while maximized; None otherwise."""
        return self._saved_layout

    def toggle_maximize(self, widget: Optional[WidgetRef]) -> bool:
        """
        Maximize ``widget`` or, when already maximized, restore.

        A request while maximized always restores the saved layout and
        ignores ``widget``, even if it names a different widget.

        Returns:
            True if a transition happened
        """
        if self.is_maximized:
            self._restore()
            return True

        if widget is None:
            logger.warning("Maximize requested without a target widget")
            return False

        layout = self._get_layout()
        if find_widget(layout, widget) is None:
            logger.warning(f"Cannot maximize '{widget.title}': widget is not in the layout")
            return False

        self._saved_layout = layout
        self._set_layout(TabArea(widgets=[widget], current_index=0))
        self._transition(MaximizeMode.MAXIMIZED)
        logger.info(f"Maximized widget '{widget.title}'")
        return True

    def unmaximize(self) -> bool:
        """Restore the saved layout if maximized; no-op otherwise."""
        if not self.is_maximized:
            return False
        self._restore()
        return True

    def reset(self) -> None:
        """Forget any saved layout without restoring it (used when the dock is discarded)."""
        self._saved_layout = None
        if self.is_maximized:
            self._transition(MaximizeMode.NORMAL)

    def _restore(self) -> None:
        layout = self._saved_layout
        self._saved_layout = None
        self._set_layout(layout)
        self._transition(MaximizeMode.NORMAL)
        logger.info("Restored layout from maximized view")

    def _transition(self, target: MaximizeMode) -> None:
        if target not in self.VALID_TRANSITIONS[self._mode]:
            raise RuntimeError(f"Invalid maximize transition: {self._mode.value} -> {target.value}")
        self._mode = target
        self.changed.emit(target)
