"""
Layout Codec - translation between layout trees and portable documents.

Documents are nested dicts/lists of primitives, ready for ``json.dump``:

    {"type": "application", "version": 1, "dashboards": [
        {"type": "dashboard", "title": "Main", "config": <area or None>}
    ]}

    area := {"type": "tab-area", "currentIndex": 0,
             "widgets": [{"title": "...", "configuration": <host payload>}]}
          | {"type": "split-area", "orientation": "horizontal" | "vertical",
             "sizes": [1.0, 1.0], "children": [area, ...]}

Widget payloads cross the boundary only through the host-supplied
``serializer``/``deserializer`` callables.

Decoding treats its input as foreign data. Shape problems are logged and the
smallest enclosing piece is dropped (a subtree, a widget entry, a dashboard's
layout) while a wrong document type or version rejects the whole document.
Only exceptions raised by the host ``deserializer`` propagate.
"""
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Dict, List, Mapping, Optional
from loguru import logger

from .area import AreaNode, Orientation, SplitArea, TabArea, WidgetRef


DOCUMENT_VERSION = 1

APPLICATION_TYPE = "application"
DASHBOARD_TYPE = "dashboard"
TAB_AREA_TYPE = "tab-area"
SPLIT_AREA_TYPE = "split-area"

AREA_TYPES = (TAB_AREA_TYPE, SPLIT_AREA_TYPE)

Serializer = Callable[[WidgetRef], Any]
Deserializer = Callable[[Any], Any]


@dataclass
class DashboardEntry:
    """One named dock instance as it crosses the persistence boundary."""
    label: str
    root: Optional[AreaNode] = None


# === Encode ===

def serialize_area(area: Optional[AreaNode], serializer: Serializer) -> Optional[Dict[str, Any]]:
    """Encode a layout tree depth-first, preserving every sequence order."""
    if area is None:
        return None

    if isinstance(area, TabArea):
        return {
            "type": TAB_AREA_TYPE,
            "currentIndex": area.current_index,
            "widgets": [
                {"title": widget.title, "configuration": serializer(widget)}
                for widget in area.widgets
            ],
        }

    return {
        "type": SPLIT_AREA_TYPE,
        "orientation": area.orientation.value,
        "sizes": list(area.sizes),
        "children": [serialize_area(child, serializer) for child in area.children],
    }


def serialize_dashboard(label: str, root: Optional[AreaNode], serializer: Serializer) -> Dict[str, Any]:
    return {
        "type": DASHBOARD_TYPE,
        "title": label,
        "config": serialize_area(root, serializer),
    }


def serialize_document(entries: List[DashboardEntry], serializer: Serializer) -> Dict[str, Any]:
    """Wrap dashboard entries in a versioned application document."""
    return {
        "type": APPLICATION_TYPE,
        "version": DOCUMENT_VERSION,
        "dashboards": [
            serialize_dashboard(entry.label, entry.root, serializer) for entry in entries
        ],
    }


# === Decode ===

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def deserialize_area(data: Any, deserializer: Deserializer) -> Optional[AreaNode]:
    """
    Decode an area document.

    Returns None for a missing or unrecognized area instead of raising, so
    a corrupt subtree can be dropped without losing its siblings.
    """
    if data is None:
        return None
    if not isinstance(data, Mapping):
        logger.warning(f"Attempted to deserialize non-mapping area: {type(data).__name__}")
        return None

    area_type = data.get("type") or "unknown"
    if area_type not in AREA_TYPES:
        logger.warning(f"Attempted to deserialize unknown type: {area_type}")
        return None

    if area_type == TAB_AREA_TYPE:
        return _deserialize_tab_area(data, deserializer)
    return _deserialize_split_area(data, deserializer)


def _deserialize_tab_area(data: Mapping, deserializer: Deserializer) -> TabArea:
    entries = data.get("widgets")
    if not isinstance(entries, list):
        if entries is not None:
            logger.warning(f"Tab area widgets is not a list: {type(entries).__name__}")
        entries = []

    widgets: List[WidgetRef] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            logger.warning(f"Dropping malformed widget entry at {position}")
            continue
        title = entry.get("title")
        if not isinstance(title, str):
            title = ""
        # Host failures are not ours to recover from.
        payload = deserializer(entry.get("configuration"))
        widgets.append(WidgetRef(title=title, payload=payload))

    current_index = data.get("currentIndex")
    if not _is_int(current_index) or not 0 <= current_index < len(widgets):
        if current_index is not None and widgets:
            logger.debug(f"Normalizing out-of-range currentIndex {current_index!r} to 0")
        current_index = 0

    return TabArea(widgets=widgets, current_index=current_index)


def _deserialize_split_area(data: Mapping, deserializer: Deserializer) -> SplitArea:
    raw_orientation = data.get("orientation")
    try:
        orientation = Orientation(raw_orientation)
    except ValueError:
        logger.warning(f"Unknown split orientation {raw_orientation!r}, using horizontal")
        orientation = Orientation.HORIZONTAL

    raw_children = data.get("children")
    if not isinstance(raw_children, list):
        if raw_children is not None:
            logger.warning(f"Split area children is not a list: {type(raw_children).__name__}")
        raw_children = []

    raw_sizes = data.get("sizes")
    if (
        not isinstance(raw_sizes, list)
        or len(raw_sizes) != len(raw_children)
        or not all(_is_number(size) for size in raw_sizes)
    ):
        logger.warning(f"Split area sizes {raw_sizes!r} do not match {len(raw_children)} children, using equal weights")
        raw_sizes = [1.0] * len(raw_children)

    children: List[AreaNode] = []
    sizes: List[float] = []
    for raw_child, size in zip(raw_children, raw_sizes):
        child = deserialize_area(raw_child, deserializer)
        if child is None:
            continue
        children.append(child)
        sizes.append(float(size))

    if len(children) != len(raw_children):
        logger.info(f"Dropped {len(raw_children) - len(children)} invalid child area(s) from split area")

    return SplitArea(orientation=orientation, children=children, sizes=sizes)


def parse_document(
    document: Any,
    deserializer: Deserializer,
    default_label: str = "Dashboard",
) -> Optional[List[DashboardEntry]]:
    """
    Validate and decode a whole application document.

    Returns:
        Dashboard entries in document order, or None if the document must
        be rejected (wrong type, unsupported version, malformed dashboards)
    """
    if not isinstance(document, Mapping):
        logger.warning(f"Attempted to deserialize non-mapping document: {type(document).__name__}")
        return None

    doc_type = document.get("type") or "unknown"
    if doc_type != APPLICATION_TYPE:
        logger.warning(f"Attempted to deserialize unknown type: {doc_type}")
        return None

    version = document.get("version")
    if not _is_int(version) or version != DOCUMENT_VERSION:
        logger.warning(f"Attempted to deserialize unknown version: {version!r}")
        return None

    dashboards = document.get("dashboards")
    if not isinstance(dashboards, list):
        logger.warning(f"Document dashboards is not a list: {type(dashboards).__name__}")
        return None

    entries: List[DashboardEntry] = []
    for position, dashboard in enumerate(dashboards):
        if not isinstance(dashboard, Mapping):
            logger.warning(f"Dropping malformed dashboard entry at {position}")
            continue

        title = dashboard.get("title")
        if not isinstance(title, str):
            logger.warning(f"Dashboard at {position} has no title, using '{default_label}'")
            title = default_label

        config = dashboard.get("config")
        root = deserialize_area(config, deserializer)
        if root is None and config is not None:
            logger.warning(f"Dashboard '{title}' layout could not be decoded, restoring it empty")
        entries.append(DashboardEntry(label=title, root=root))

    return entries
