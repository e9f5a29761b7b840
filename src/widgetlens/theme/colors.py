"""
Color value resolution from AST nodes.
"""

import re
from typing import Mapping, Optional

from ..parsing.nodes import Node, Literal, ConstructorCall, PropertyAccess, property_path
from ..tables import COLOR_CONSTANTS

HEX_LITERAL = re.compile(r"0x([0-9a-fA-F]+)")


def argb_to_hex(value: int) -> str:
    """Format a 32-bit color integer as ``#aarrggbb``."""
    return "#" + format(value & 0xFFFFFFFF, "08x")


def color_from_constructor(node: ConstructorCall) -> Optional[str]:
    """Resolve ``Color(0xAARRGGBB)`` or ``Color('0x...')``."""
    if node.name != "Color":
        return None
    positional = node.arguments.positional()
    if not positional or not isinstance(positional[0].value, Literal):
        return None

    value = positional[0].value.value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return argb_to_hex(value)
    if isinstance(value, str):
        match = HEX_LITERAL.search(value)
        if match:
            return argb_to_hex(int(match.group(1), 16))
    return None


def resolve_color_constant(path: str,
                           constants: Mapping[str, str] = COLOR_CONSTANTS) -> Optional[str]:
    return constants.get(path)


def resolve_color_node(node: Node,
                       constants: Mapping[str, str] = COLOR_CONSTANTS) -> Optional[str]:
    """
    Resolve a color expression to a hex string.

    Priority: hex constructor (or bare integer literal), then the named
    constant table. Returns None when neither applies.
    """
    if isinstance(node, ConstructorCall):
        return color_from_constructor(node)
    if isinstance(node, Literal) and isinstance(node.value, int) and not isinstance(node.value, bool):
        return argb_to_hex(node.value)
    if isinstance(node, PropertyAccess):
        path = property_path(node)
        if path:
            return resolve_color_constant(path, constants)
    return None


def is_color_constant_path(path: Optional[str]) -> bool:
    return bool(path) and path.startswith("Colors.")
