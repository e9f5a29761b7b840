"""
Widget tree structure and hierarchy queries.

Cross-references (parent, siblings) are kept by widget id so the tree itself
never holds back pointers.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Set

from ..models import Widget, WidgetType

logger = logging.getLogger(__name__)

CONTAINER_TYPES = frozenset({
    WidgetType.CONTAINER, WidgetType.ROW, WidgetType.COLUMN, WidgetType.STACK,
    WidgetType.CARD, WidgetType.SCAFFOLD, WidgetType.BUTTON,
})


@dataclass
class WidgetHierarchy:
    """Position of one widget within its tree."""
    widget_id: str
    parent_id: Optional[str]
    depth: int
    path: List[str]
    sibling_ids: List[str]
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "widgetId": self.widget_id,
            "parentId": self.parent_id,
            "depth": self.depth,
            "path": list(self.path),
            "siblings": list(self.sibling_ids),
            "index": self.index,
        }


@dataclass
class WidgetTreeAnalysis:
    """Structural summary of a widget forest."""
    trees: List[Widget] = field(default_factory=list)
    hierarchies: Dict[str, WidgetHierarchy] = field(default_factory=dict)
    max_depth: int = 0
    total_nodes: int = 0
    container_widgets: List[Widget] = field(default_factory=list)
    leaf_widgets: List[Widget] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maxDepth": self.max_depth,
            "totalNodes": self.total_nodes,
            "containerWidgets": [w.id for w in self.container_widgets],
            "leafWidgets": [w.id for w in self.leaf_widgets],
            "hierarchies": {k: v.to_dict() for k, v in self.hierarchies.items()},
        }


@dataclass
class TreeValidation:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"isValid": self.is_valid, "errors": list(self.errors)}


class WidgetTreeBuilder:
    """Builds hierarchy information and answers tree queries."""

    def build_trees(self, widgets: List[Widget]) -> WidgetTreeAnalysis:
        analysis = WidgetTreeAnalysis(trees=list(widgets))

        for index, root in enumerate(widgets):
            self._index_widget(root, None, 0, [], [w.id for w in widgets], index, analysis)

        logger.debug(f"Built {len(widgets)} trees with {analysis.total_nodes} nodes, "
                     f"max depth {analysis.max_depth}")
        return analysis

    def _index_widget(self, widget: Widget, parent_id: Optional[str], depth: int,
                      parent_path: List[str], sibling_ids: List[str], index: int,
                      analysis: WidgetTreeAnalysis) -> None:
        path = parent_path + [widget.type.value]
        analysis.hierarchies[widget.id] = WidgetHierarchy(
            widget_id=widget.id,
            parent_id=parent_id,
            depth=depth,
            path=path,
            sibling_ids=[sid for sid in sibling_ids if sid != widget.id],
            index=index,
        )
        analysis.total_nodes += 1
        analysis.max_depth = max(analysis.max_depth, depth)

        if self.is_container(widget):
            analysis.container_widgets.append(widget)
        if not widget.children:
            analysis.leaf_widgets.append(widget)

        child_ids = [child.id for child in widget.children]
        for child_index, child in enumerate(widget.children):
            self._index_widget(child, widget.id, depth + 1, path, child_ids, child_index, analysis)

    @staticmethod
    def is_container(widget: Widget) -> bool:
        return widget.type in CONTAINER_TYPES or bool(widget.children)

    def calculate_depth(self, widget: Widget) -> int:
        """Depth in edges of the deepest descendant."""
        if not widget.children:
            return 0
        return 1 + max(self.calculate_depth(child) for child in widget.children)

    def flatten(self, widgets: List[Widget]) -> List[Widget]:
        """All widgets of the forest in pre-order."""
        return [node for root in widgets for node in root.iter_tree()]

    def find_widgets_by_type(self, widgets: List[Widget], widget_type: WidgetType) -> List[Widget]:
        return [w for w in self.flatten(widgets) if w.type == widget_type]

    def find_widgets_by_property(self, widgets: List[Widget], name: str,
                                 value: Any = None) -> List[Widget]:
        """Widgets carrying a property, optionally with a specific value."""
        return [w for w in self.flatten(widgets)
                if name in w.properties and (value is None or w.properties[name] == value)]

    def find_by_id(self, widgets: List[Widget], widget_id: str) -> Optional[Widget]:
        for widget in self.flatten(widgets):
            if widget.id == widget_id:
                return widget
        return None

    def get_widget_path(self, widgets: List[Widget], widget_id: str) -> Optional[List[str]]:
        """Ids from the root down to the widget, or None if absent."""
        for root in widgets:
            path = self._path_to(root, widget_id)
            if path is not None:
                return path
        return None

    def _path_to(self, widget: Widget, widget_id: str) -> Optional[List[str]]:
        if widget.id == widget_id:
            return [widget.id]
        for child in widget.children:
            path = self._path_to(child, widget_id)
            if path is not None:
                return [widget.id] + path
        return None

    def get_descendants(self, widget: Widget) -> List[Widget]:
        return list(widget.iter_tree())[1:]

    def get_ancestors(self, widgets: List[Widget], widget_id: str) -> List[Widget]:
        """Ancestors ordered from the root down."""
        path = self.get_widget_path(widgets, widget_id)
        if not path:
            return []
        return [self.find_by_id(widgets, ancestor_id) for ancestor_id in path[:-1]]

    def is_ancestor(self, widgets: List[Widget], ancestor_id: str, widget_id: str) -> bool:
        path = self.get_widget_path(widgets, widget_id)
        return bool(path) and ancestor_id in path[:-1]

    def get_siblings(self, widgets: List[Widget], widget_id: str) -> List[Widget]:
        path = self.get_widget_path(widgets, widget_id)
        if not path:
            return []
        if len(path) == 1:
            peers = widgets
        else:
            peers = self.find_by_id(widgets, path[-2]).children
        return [w for w in peers if w.id != widget_id]

    def get_widget_at_path(self, widgets: List[Widget], indices: List[int]) -> Optional[Widget]:
        """
        Follow child indices from the forest roots.

        Args:
            widgets: Forest roots
            indices: Root index followed by child indices

        Returns:
            The widget at that position, or None when any index is out of range
        """
        if not indices or not 0 <= indices[0] < len(widgets):
            return None
        current = widgets[indices[0]]
        for index in indices[1:]:
            if not 0 <= index < len(current.children):
                return None
            current = current.children[index]
        return current

    def validate_tree(self, widgets: List[Widget]) -> TreeValidation:
        """Check for duplicate ids, cycles, and widgets reachable twice."""
        errors: List[str] = []
        seen_ids: Set[str] = set()
        seen_objects: Set[int] = set()

        def visit(widget: Widget, active: Set[int]) -> None:
            if id(widget) in active:
                errors.append("Circular reference detected in widget tree")
                return
            if id(widget) in seen_objects:
                errors.append(f"Orphaned widget found: {widget.id} ({widget.type.value})")
                return
            seen_objects.add(id(widget))

            if widget.id in seen_ids:
                errors.append(f"Duplicate widget ID found: {widget.id}")
            seen_ids.add(widget.id)

            active.add(id(widget))
            for child in widget.children:
                visit(child, active)
            active.discard(id(widget))

        for root in widgets:
            visit(root, set())

        return TreeValidation(is_valid=not errors, errors=errors)

    def clone_tree(self, widget: Widget) -> Widget:
        return copy.deepcopy(widget)
