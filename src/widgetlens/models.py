"""
Data models for widgetlens.

Widgets are produced by the extractor and are structurally immutable afterwards:
analyzers read them and build their own derived views.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any


class DiagnosticKind(Enum):
    """Origin of an accumulated diagnostic."""
    LEXICAL = "lexical"
    SYNTAX = "syntax"
    SEMANTIC = "semantic"


@dataclass
class Diagnostic:
    """A recorded, non-fatal error with its source position."""

    message: str
    line: int = 0
    column: int = 0
    offset: int = 0
    kind: DiagnosticKind = DiagnosticKind.SYNTAX

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "offset": self.offset,
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Diagnostic':
        """Create instance from dictionary."""
        return cls(
            message=data["message"],
            line=data.get("line", 0),
            column=data.get("column", 0),
            offset=data.get("offset", 0),
            kind=DiagnosticKind(data.get("kind", "syntax")),
        )


class ErrorCollector:
    """
    Accumulates diagnostics and warnings for one analysis call.

    Collectors from independent units can be merged afterwards; merge order is
    the caller's input order.
    """

    def __init__(self):
        self.errors: List[Diagnostic] = []
        self.warnings: List[str] = []

    def reset(self) -> None:
        self.errors = []
        self.warnings = []

    def add_error(self, message: str, line: int = 0, column: int = 0,
                  offset: int = 0, kind: DiagnosticKind = DiagnosticKind.SEMANTIC) -> Diagnostic:
        diagnostic = Diagnostic(message, line, column, offset, kind)
        self.errors.append(diagnostic)
        return diagnostic

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def extend(self, errors: List[Diagnostic], warnings: Optional[List[str]] = None) -> None:
        self.errors.extend(errors)
        if warnings:
            self.warnings.extend(warnings)

    def merge(self, other: 'ErrorCollector') -> None:
        self.extend(other.errors, other.warnings)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0


class WidgetType(Enum):
    """Closed set of widget kinds produced by extraction."""
    CONTAINER = "Container"
    ROW = "Row"
    COLUMN = "Column"
    STACK = "Stack"
    TEXT = "Text"
    IMAGE = "Image"
    BUTTON = "Button"
    CARD = "Card"
    SCAFFOLD = "Scaffold"
    APP_BAR = "AppBar"
    CUPERTINO_BUTTON = "CupertinoButton"
    CUPERTINO_NAVIGATION_BAR = "CupertinoNavigationBar"
    CUSTOM = "Custom"


@dataclass
class ColorBinding:
    """A color-bearing property and its literal or theme-bound value."""

    property: str
    value: str
    is_theme_reference: bool = False
    theme_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "property": self.property,
            "value": self.value,
            "isThemeReference": self.is_theme_reference,
        }
        if self.theme_path is not None:
            data["themePath"] = self.theme_path
        return data


@dataclass
class TypographyBinding:
    """Text styling attached to a widget, either inline or theme-bound."""

    source_property: str = "style"
    font_size: Optional[float] = None
    font_weight: Optional[str] = None
    font_family: Optional[str] = None
    letter_spacing: Optional[float] = None
    line_height: Optional[float] = None
    color: Optional[str] = None
    is_theme_reference: bool = False
    theme_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "property": self.source_property,
            "isThemeReference": self.is_theme_reference,
        }
        optional = {
            "fontSize": self.font_size,
            "fontWeight": self.font_weight,
            "fontFamily": self.font_family,
            "letterSpacing": self.letter_spacing,
            "lineHeight": self.line_height,
            "color": self.color,
            "themePath": self.theme_path,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


@dataclass
class Styling:
    """Resolved styling for a widget."""

    colors: List[ColorBinding] = field(default_factory=list)
    typography: Optional[TypographyBinding] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": [color.to_dict() for color in self.colors],
            "typography": self.typography.to_dict() if self.typography else None,
        }


@dataclass
class EdgeInsets:
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0

    @classmethod
    def uniform(cls, value: float) -> 'EdgeInsets':
        return cls(value, value, value, value)

    def to_dict(self) -> Dict[str, float]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


@dataclass
class Alignment:
    main_axis: Optional[str] = None
    cross_axis: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {}
        if self.main_axis is not None:
            data["mainAxis"] = self.main_axis
        if self.cross_axis is not None:
            data["crossAxis"] = self.cross_axis
        return data


@dataclass
class LayoutHint:
    """Layout information read directly from a layout constructor."""

    type: str
    direction: Optional[str] = None
    alignment: Optional[Alignment] = None
    spacing: Optional[float] = None
    padding: Optional[EdgeInsets] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if self.direction is not None:
            data["direction"] = self.direction
        if self.alignment is not None:
            data["alignment"] = self.alignment.to_dict()
        if self.spacing is not None:
            data["spacing"] = self.spacing
        if self.padding is not None:
            data["padding"] = self.padding.to_dict()
        return data


POSITION_FIELDS = ("top", "right", "bottom", "left", "width", "height")


@dataclass
class PositionHint:
    """Absolute placement inside a stack."""

    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    left: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in POSITION_FIELDS)

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in POSITION_FIELDS
                if getattr(self, name) is not None}


@dataclass
class Widget:
    """A node of the extracted UI tree; one per DSL constructor call."""

    id: str
    type: WidgetType
    properties: Dict[str, Any] = field(default_factory=dict)
    children: List['Widget'] = field(default_factory=list)
    styling: Styling = field(default_factory=Styling)
    layout: Optional[LayoutHint] = None
    position: Optional[PositionHint] = None

    @property
    def custom_type(self) -> Optional[str]:
        """Original constructor name for Custom widgets."""
        return self.properties.get("customType")

    def iter_tree(self):
        """Yield this widget and all descendants depth-first, pre-order."""
        yield self
        for child in self.children:
            yield from child.iter_tree()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "properties": self.properties,
            "children": [child.to_dict() for child in self.children],
            "styling": self.styling.to_dict(),
        }
        if self.layout is not None:
            data["layout"] = self.layout.to_dict()
        if self.position is not None:
            data["position"] = self.position.to_dict()
        return data
