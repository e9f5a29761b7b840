"""
Canonical widget structure and its hash.

Only shape participates: type, child count, child structures, layout
type/direction and the custom constructor name. Styling, text and sizes are
left out so stylistic variants of one shape share a hash. Distinct
structures that collide are treated as equivalent.
"""

import hashlib
import json
from typing import Dict, Any, List

from ..models import Widget

STRUCTURAL_PROPERTIES = ("customType",)


def widget_structure(widget: Widget) -> Dict[str, Any]:
    structure: Dict[str, Any] = {
        "type": widget.type.value,
        "childCount": len(widget.children),
        "children": [widget_structure(child) for child in widget.children],
    }
    if widget.layout is not None:
        structure["layout"] = {"type": widget.layout.type, "direction": widget.layout.direction}
    for prop in STRUCTURAL_PROPERTIES:
        if widget.properties.get(prop) is not None:
            structure[prop] = widget.properties[prop]
    return structure


def hash_object(obj: Any) -> str:
    """Stable hash of a JSON-serializable value."""
    canonical = json.dumps(obj, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def structure_hash(widget: Widget) -> str:
    return hash_object(widget_structure(widget))


def structure_tokens(widget: Widget) -> List[str]:
    """
    Flatten a widget's structure into features for similarity hashing.

    Each node contributes its type and its parent/child edge, so shapes that
    differ in one subtree still share most features.
    """
    tokens: List[str] = []

    def visit(node: Widget, parent: str, depth: int) -> None:
        label = node.custom_type or node.type.value
        tokens.append(label)
        tokens.append(f"{parent}>{label}")
        tokens.append(f"{label}@{depth}")
        if node.layout is not None:
            tokens.append(f"{label}:{node.layout.type}")
        for child in node.children:
            visit(child, label, depth + 1)

    visit(widget, "^", 0)
    return tokens
