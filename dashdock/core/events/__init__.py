"""
Event primitives.

Provides:
- Signal: synchronous observer used by docks, the workspace and the config manager

Usage:
    from dashdock.core.events import Signal

    changed = Signal("LayoutChanged")
    changed.connect(on_changed)
    changed.emit(dock)
"""
from .observer import Signal


__all__ = ["Signal"]
