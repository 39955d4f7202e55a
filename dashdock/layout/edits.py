"""
Structural edits on a layout tree.

Regions are addressed by child-index paths from the root (``()`` is the root).
Every edit mutates the tree in place and returns the (possibly new) root, since
inserting into an empty layout or collapsing a split can replace the root node.
Invalid paths or indices leave the tree unchanged and raise ``LayoutEditError``;
``DockInstance`` turns that into a logged warning for the UI layer.
"""
from typing import Optional, Tuple
from loguru import logger

from .area import AreaNode, Orientation, Path, SplitArea, TabArea, WidgetRef, iter_widgets, node_at


class LayoutEditError(ValueError):
    """Raised when an edit addresses a region or index that does not exist."""
    pass


def _tab_area_at(root: Optional[AreaNode], path: Path) -> TabArea:
    node = node_at(root, path)
    if not isinstance(node, TabArea):
        raise LayoutEditError(f"No tab area at path {path}")
    return node


def _replace(root: AreaNode, path: Path, new_node: Optional[AreaNode]) -> Optional[AreaNode]:
    """Replace the node at ``path``; None removes it from its parent."""
    if not path:
        return new_node
    parent = node_at(root, path[:-1])
    index = path[-1]
    if new_node is None:
        del parent.children[index]
        del parent.sizes[index]
        return _collapse(root, path[:-1])
    parent.children[index] = new_node
    return root


def _collapse(root: AreaNode, path: Path) -> Optional[AreaNode]:
    """Fold a split left with zero or one child into its parent."""
    node = node_at(root, path)
    if not isinstance(node, SplitArea) or len(node.children) > 1:
        return root
    if not node.children:
        logger.debug(f"Removing empty split at {path}")
        return _replace(root, path, None)
    logger.debug(f"Collapsing single-child split at {path}")
    return _replace(root, path, node.children[0])


def insert_widget(root: Optional[AreaNode], path: Path, index: Optional[int], widget: WidgetRef) -> AreaNode:
    """
    Insert a widget into the tab area at ``path`` and make it current.

    ``index`` is clamped to the valid insertion range; None appends. An empty layout
    accepts an insert at the root path and gains a new tab area.
    """
    if root is None and path == ():
        logger.debug(f"Creating root tab area for '{widget.title}'")
        return TabArea(widgets=[widget], current_index=0)

    area = _tab_area_at(root, path)
    if index is None:
        index = len(area.widgets)
    index = max(0, min(index, len(area.widgets)))
    area.widgets.insert(index, widget)
    area.current_index = index
    logger.debug(f"Inserted '{widget.title}' at {path}[{index}]")
    return root


def move_widget(root: Optional[AreaNode], path: Path, from_index: int, to_index: int) -> AreaNode:
    """Reorder a widget within its tab area. The current widget stays current."""
    area = _tab_area_at(root, path)
    count = len(area.widgets)
    if not 0 <= from_index < count or not 0 <= to_index < count:
        raise LayoutEditError(f"Move {from_index} -> {to_index} out of range for {count} widgets")

    current = area.current_widget
    widget = area.widgets.pop(from_index)
    area.widgets.insert(to_index, widget)
    area.current_index = next(i for i, w in enumerate(area.widgets) if w is current)
    logger.debug(f"Moved widget at {path}: {from_index} -> {to_index}")
    return root


def remove_widget(root: Optional[AreaNode], path: Path, index: int) -> Optional[AreaNode]:
    """
    Remove a widget from the tab area at ``path``.

    An emptied tab area is removed from the tree, and a split left with a
    single child is replaced by that child.
    """
    area = _tab_area_at(root, path)
    if not 0 <= index < len(area.widgets):
        raise LayoutEditError(f"Remove index {index} out of range for {len(area.widgets)} widgets")

    removed = area.widgets.pop(index)
    if index < area.current_index or area.current_index >= len(area.widgets):
        area.current_index -= 1
    area.normalize_index()
    logger.debug(f"Removed '{removed.title}' from {path}[{index}]")

    if area.widgets:
        return root
    logger.debug(f"Tab area at {path} is empty, removing region")
    return _replace(root, path, None)


def split_region(
    root: Optional[AreaNode],
    path: Path,
    orientation: Orientation,
    widget: WidgetRef,
    after: bool = True,
    sizes: Tuple[float, float] = (1.0, 1.0),
) -> Tuple[AreaNode, Path]:
    """
    Place ``widget`` in a new tab area beside the region at ``path``.

    If the region's parent already splits along ``orientation``, the new area
    becomes a sibling and takes half of the region's weight. Otherwise the
    region is wrapped in a new split weighted by ``sizes``.

    Returns:
        ``(root, path_of_new_area)``
    """
    region = node_at(root, path)
    if region is None:
        raise LayoutEditError(f"No region at path {path}")

    new_area = TabArea(widgets=[widget], current_index=0)
    parent = node_at(root, path[:-1]) if path else None

    if isinstance(parent, SplitArea) and parent.orientation == orientation:
        index = path[-1]
        half = parent.sizes[index] / 2
        parent.sizes[index] = half
        insert_at = index + 1 if after else index
        parent.children.insert(insert_at, new_area)
        parent.sizes.insert(insert_at, half)
        logger.debug(f"Split {path} {orientation.value} as sibling at {insert_at}")
        return root, path[:-1] + (insert_at,)

    children = [region, new_area] if after else [new_area, region]
    wrapper = SplitArea(orientation=orientation, children=children, sizes=list(sizes))
    root = _replace(root, path, wrapper)
    new_path = path + ((1,) if after else (0,))
    logger.debug(f"Split {path} {orientation.value} into new split area")
    return root, new_path


def merge_region(root: Optional[AreaNode], path: Path) -> Optional[AreaNode]:
    """Collapse the split at ``path`` into one tab area holding all its widgets in document order."""
    node = node_at(root, path)
    if not isinstance(node, SplitArea):
        raise LayoutEditError(f"No split area at path {path}")

    widgets = list(iter_widgets(node))
    merged = TabArea(widgets=widgets, current_index=0)
    logger.debug(f"Merged split at {path} into tab area with {len(widgets)} widgets")
    if not widgets:
        return _replace(root, path, None)
    return _replace(root, path, merged)
