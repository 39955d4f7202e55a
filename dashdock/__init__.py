"""
dashdock - dashboard layout trees, persistence and maximize/restore.

Arrange widgets into tabbed and split regions across several dashboards,
save the arrangement to a portable document and restore it later.
"""

# Core
from dashdock.core.events import Signal
from dashdock.core.config import ConfigManager, AppConfig, GeneralSettings, LayoutSettings, SessionSettings
from dashdock.core.logging import setup_logging

# Layout
from dashdock.layout.area import AreaNode, Orientation, SplitArea, TabArea, WidgetRef
from dashdock.layout.codec import DashboardEntry, deserialize_area, parse_document, serialize_area
from dashdock.layout.maximize import MaximizeController, MaximizeMode
from dashdock.layout.dock import DockInstance

# Application state
from dashdock.workspace import Workspace
from dashdock.state.session import SessionState

__version__ = "0.1.0"

__all__ = [
    # Core
    "Signal",
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "LayoutSettings",
    "SessionSettings",
    "setup_logging",

    # Layout
    "AreaNode",
    "Orientation",
    "SplitArea",
    "TabArea",
    "WidgetRef",
    "DashboardEntry",
    "deserialize_area",
    "parse_document",
    "serialize_area",
    "MaximizeController",
    "MaximizeMode",
    "DockInstance",

    # Application state
    "Workspace",
    "SessionState",
]
