"""
AST node definitions for the widget DSL.

The tree is strictly parent-to-child: nodes are never shared and carry no
back references.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union, Any, Dict


@dataclass
class Node:
    """Base class carrying the source span of a node."""
    line: int = field(default=0, kw_only=True)
    column: int = field(default=0, kw_only=True)
    start: int = field(default=0, kw_only=True)
    end: int = field(default=0, kw_only=True)


@dataclass
class Identifier(Node):
    name: str


@dataclass
class Literal(Node):
    value: Union[str, int, float, bool, None]
    raw: str = ""


@dataclass
class NamedArgument(Node):
    name: str
    value: 'Expression'


@dataclass
class PositionalArgument(Node):
    value: 'Expression'


Argument = Union[NamedArgument, PositionalArgument]


@dataclass
class ArgumentList(Node):
    arguments: List[Argument] = field(default_factory=list)

    def named(self) -> List[NamedArgument]:
        return [arg for arg in self.arguments if isinstance(arg, NamedArgument)]

    def positional(self) -> List[PositionalArgument]:
        return [arg for arg in self.arguments if isinstance(arg, PositionalArgument)]

    def get(self, name: str) -> Optional['Expression']:
        """Value of the first named argument called ``name``."""
        for arg in self.named():
            if arg.name == name:
                return arg.value
        return None


@dataclass
class ConstructorCall(Node):
    name: str
    arguments: ArgumentList = field(default_factory=ArgumentList)


@dataclass
class PropertyAccess(Node):
    object: 'Expression'
    property: Identifier


@dataclass
class MethodCall(Node):
    object: 'Expression'
    method: Identifier
    arguments: ArgumentList = field(default_factory=ArgumentList)


@dataclass
class ArrayLiteral(Node):
    elements: List['Expression'] = field(default_factory=list)


Expression = Union[Identifier, Literal, ConstructorCall, PropertyAccess, MethodCall, ArrayLiteral]


@dataclass
class Program(Node):
    body: List[Expression] = field(default_factory=list)


def child_nodes(node: Node) -> List[Node]:
    """Direct children of a node in source order."""
    if isinstance(node, Program):
        return list(node.body)
    if isinstance(node, ConstructorCall):
        return [node.arguments]
    if isinstance(node, ArgumentList):
        return list(node.arguments)
    if isinstance(node, (NamedArgument, PositionalArgument)):
        return [node.value]
    if isinstance(node, ArrayLiteral):
        return list(node.elements)
    if isinstance(node, PropertyAccess):
        return [node.object]
    if isinstance(node, MethodCall):
        return [node.object, node.arguments]
    return []


def property_path(node: Node) -> Optional[str]:
    """
    Build a dotted path for an access chain.

    Method calls contribute ``name(context)``, so ``Theme.of(context).x`` maps
    to the string a reader would write.
    """
    parts: List[str] = []
    current: Optional[Node] = node
    while current is not None:
        if isinstance(current, PropertyAccess):
            parts.insert(0, current.property.name)
            current = current.object
        elif isinstance(current, Identifier):
            parts.insert(0, current.name)
            break
        elif isinstance(current, MethodCall):
            parts.insert(0, f"{current.method.name}(context)")
            current = current.object
        else:
            break
    return ".".join(parts) if parts else None


def print_node(node: Node) -> str:
    """
    Serialize a node back to canonical DSL text.

    Formatting is normalized (single spaces, no trailing commas) so two
    structurally equal trees print identically.
    """
    if isinstance(node, Program):
        return "\n".join(print_node(expr) for expr in node.body)
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, Literal):
        return _print_literal(node)
    if isinstance(node, ConstructorCall):
        return f"{node.name}({print_node(node.arguments)})"
    if isinstance(node, PropertyAccess):
        return f"{print_node(node.object)}.{node.property.name}"
    if isinstance(node, MethodCall):
        return f"{print_node(node.object)}.{node.method.name}({print_node(node.arguments)})"
    if isinstance(node, ArgumentList):
        return ", ".join(print_node(arg) for arg in node.arguments)
    if isinstance(node, NamedArgument):
        return f"{node.name}: {print_node(node.value)}"
    if isinstance(node, PositionalArgument):
        return print_node(node.value)
    if isinstance(node, ArrayLiteral):
        return "[" + ", ".join(print_node(e) for e in node.elements) + "]"
    raise TypeError(f"Cannot print node of type {type(node).__name__}")


def _print_literal(node: Literal) -> str:
    if node.value is None:
        return "null"
    if isinstance(node.value, bool):
        return "true" if node.value else "false"
    if isinstance(node.value, str):
        quote = '"' if "'" in node.value else "'"
        return f"{quote}{node.value}{quote}"
    if node.raw:
        return node.raw
    return str(node.value)


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Convert a node to a plain dictionary (for JSON output)."""
    data: Dict[str, Any] = {"type": type(node).__name__, "line": node.line, "column": node.column}
    if isinstance(node, Program):
        data["body"] = [node_to_dict(expr) for expr in node.body]
    elif isinstance(node, Identifier):
        data["name"] = node.name
    elif isinstance(node, Literal):
        data["value"] = node.value
    elif isinstance(node, ConstructorCall):
        data["name"] = node.name
        data["arguments"] = node_to_dict(node.arguments)
    elif isinstance(node, PropertyAccess):
        data["object"] = node_to_dict(node.object)
        data["property"] = node.property.name
    elif isinstance(node, MethodCall):
        data["object"] = node_to_dict(node.object)
        data["method"] = node.method.name
        data["arguments"] = node_to_dict(node.arguments)
    elif isinstance(node, ArgumentList):
        data["arguments"] = [node_to_dict(arg) for arg in node.arguments]
    elif isinstance(node, NamedArgument):
        data["name"] = node.name
        data["value"] = node_to_dict(node.value)
    elif isinstance(node, PositionalArgument):
        data["value"] = node_to_dict(node.value)
    elif isinstance(node, ArrayLiteral):
        data["elements"] = [node_to_dict(e) for e in node.elements]
    return data
