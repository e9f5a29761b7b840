"""
Helpers for theme reference paths such as ``Theme.of(context).colorScheme.primary``.
"""

from typing import Optional

from ..parsing.nodes import Node, Identifier, MethodCall, PropertyAccess, property_path

THEME_ACCESSOR = "Theme.of(context)"


def is_theme_of_call(node: Node) -> bool:
    return (isinstance(node, MethodCall)
            and node.method.name == "of"
            and isinstance(node.object, Identifier)
            and node.object.name == "Theme")


def is_theme_accessor_chain(node: Node) -> bool:
    """True for property chains rooted at ``Theme.of(...)``."""
    current = node
    while isinstance(current, PropertyAccess):
        current = current.object
        if is_theme_of_call(current):
            return True
    return False


def theme_reference_path(node: Node) -> Optional[str]:
    """Full dotted path of a theme accessor chain, or None."""
    if not is_theme_accessor_chain(node):
        return None
    return property_path(node)


def is_theme_reference_path(path: Optional[str]) -> bool:
    if not path:
        return False
    return (path.startswith(THEME_ACCESSOR)
            or "theme." in path
            or "colorScheme." in path
            or "textTheme." in path)


def strip_theme_accessor(path: str) -> str:
    """Drop a leading ``Theme.of(context).`` from a path."""
    prefix = THEME_ACCESSOR + "."
    if path.startswith(prefix):
        return path[len(prefix):]
    return path
