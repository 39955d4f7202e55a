"""
Layout tree model for a single dock instance.

A layout is a tree of two node kinds:
- TabArea: a leaf holding an ordered list of widgets, one of which is current
- SplitArea: a branch dividing its region among ordered children along an axis

Trees are plain values. Nodes are owned by exactly one parent and are replaced
wholesale by load, maximize and restore; structural edits live in
``dashdock.layout.edits``.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple, Union


Path = Tuple[int, ...]


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass
class WidgetRef:
    """A display title plus the host-owned payload it stands for."""
    title: str
    payload: Any = None


@dataclass
class TabArea:
    """
    Leaf region showing one widget at a time.

    ``current_index`` is -1 only when ``widgets`` is empty. Any other
    out-of-range value is normalized to 0 on construction.
    """
    widgets: List[WidgetRef] = field(default_factory=list)
    current_index: int = 0

    def __post_init__(self):
        self.widgets = list(self.widgets)
        self.normalize_index()

    def normalize_index(self) -> None:
        if not self.widgets:
            self.current_index = -1
        elif not 0 <= self.current_index < len(self.widgets):
            self.current_index = 0

    @property
    def current_widget(self) -> Optional[WidgetRef]:
        if self.current_index < 0:
            return None
        return self.widgets[self.current_index]


@dataclass
class SplitArea:
    """
    Branch region divided among ``children``.

    ``sizes`` are relative weights, one per child, index-aligned with
    ``children``.
    """
    orientation: Orientation = Orientation.HORIZONTAL
    children: List["AreaNode"] = field(default_factory=list)
    sizes: List[float] = field(default_factory=list)

    def __post_init__(self):
        self.children = list(self.children)
        self.sizes = [float(s) for s in self.sizes]
        if len(self.children) != len(self.sizes):
            raise ValueError(
                f"SplitArea has {len(self.children)} children but {len(self.sizes)} sizes"
            )


AreaNode = Union[TabArea, SplitArea]


def iter_tab_areas(root: Optional[AreaNode]) -> Iterator[TabArea]:
    """Yield every tab area in document order."""
    for _, area in iter_tab_areas_with_paths(root):
        yield area


def iter_tab_areas_with_paths(root: Optional[AreaNode], path: Path = ()) -> Iterator[Tuple[Path, TabArea]]:
    """Yield ``(path, tab_area)`` pairs in document order."""
    if root is None:
        return
    if isinstance(root, TabArea):
        yield path, root
        return
    for i, child in enumerate(root.children):
        yield from iter_tab_areas_with_paths(child, path + (i,))


def iter_widgets(root: Optional[AreaNode]) -> Iterator[WidgetRef]:
    """Yield every widget in document order."""
    for area in iter_tab_areas(root):
        yield from area.widgets


def find_widget(root: Optional[AreaNode], widget: WidgetRef) -> Optional[Tuple[Path, int]]:
    """
    Locate a widget by identity first, then by equality.

    Returns:
        ``(path, index)`` of the first match, or None
    """
    areas = list(iter_tab_areas_with_paths(root))
    for path, area in areas:
        for i, candidate in enumerate(area.widgets):
            if candidate is widget:
                return path, i
    for path, area in areas:
        for i, candidate in enumerate(area.widgets):
            if candidate == widget:
                return path, i
    return None


def node_at(root: Optional[AreaNode], path: Path) -> Optional[AreaNode]:
    """Resolve a child-index path; ``()`` is the root."""
    node = root
    for index in path:
        if not isinstance(node, SplitArea) or not 0 <= index < len(node.children):
            return None
        node = node.children[index]
    return node


