"""
Widget extraction: turns parsed constructor calls into a typed widget tree.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Mapping

from ..models import (
    Widget, WidgetType, Styling, ColorBinding, TypographyBinding, LayoutHint,
    PositionHint, Alignment, Diagnostic, ErrorCollector, POSITION_FIELDS,
)
from ..parsing.nodes import (
    Node, Identifier, Literal, ConstructorCall, PropertyAccess, MethodCall,
    ArgumentList, ArrayLiteral, property_path,
)
from ..tables import (
    KNOWN_WIDGETS, POSITIONAL_SLOTS, COLOR_PROPERTIES, COLOR_CONSTANTS, FONT_WEIGHTS,
    map_main_axis, map_cross_axis,
)
from ..theme.colors import resolve_color_node, is_color_constant_path
from ..theme.paths import theme_reference_path

logger = logging.getLogger(__name__)

CHILD_ARGUMENTS = ("child", "children")

EDGE_INSETS_ZERO = {"top": 0, "right": 0, "bottom": 0, "left": 0}


@dataclass
class WidgetExtractionResult:
    """Widgets extracted from one set of top-level expressions."""
    widgets: List[Widget] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "widgets": [w.to_dict() for w in self.widgets],
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class WidgetExtractor:
    """
    Flutter-style widget detector and property extractor.

    Unknown constructors never stop extraction: they become Custom widgets
    and produce a warning.
    """

    def __init__(self, known_widgets: Optional[Mapping[str, WidgetType]] = None,
                 color_constants: Optional[Mapping[str, str]] = None,
                 positional_slots: Optional[Mapping[str, str]] = None):
        self.known_widgets = known_widgets if known_widgets is not None else KNOWN_WIDGETS
        self.color_constants = color_constants if color_constants is not None else COLOR_CONSTANTS
        self.positional_slots = positional_slots if positional_slots is not None else POSITIONAL_SLOTS
        self._collector = ErrorCollector()
        self._id_counter = 0

    def extract_widgets(self, nodes: List[Node]) -> WidgetExtractionResult:
        """
        Extract widgets from top-level AST expressions.

        Args:
            nodes: Top-level expressions (``Program.body``)

        Returns:
            WidgetExtractionResult with widgets in source order
        """
        self._collector = ErrorCollector()
        self._id_counter = 0

        widgets = []
        for node in nodes:
            widget = self._extract_widget(node)
            if widget is not None:
                widgets.append(widget)

        logger.info(f"Extracted {len(widgets)} top-level widgets "
                    f"({self._id_counter} total, {len(self._collector.warnings)} warnings)")
        return WidgetExtractionResult(
            widgets=widgets,
            errors=self._collector.errors,
            warnings=self._collector.warnings,
        )

    def _extract_widget(self, node: Node) -> Optional[Widget]:
        named_constructor = None
        if isinstance(node, ConstructorCall):
            name, arguments = node.name, node.arguments
        elif (isinstance(node, MethodCall) and isinstance(node.object, Identifier)
              and node.object.name in self.known_widgets):
            # Named constructors such as ListView.builder or Image.network
            name, arguments = node.object.name, node.arguments
            named_constructor = node.method.name
        else:
            return None

        widget_type = self.known_widgets.get(name)
        if widget_type is None:
            self._collector.add_warning(f"Unknown widget type: {name}")
            widget_type = WidgetType.CUSTOM

        widget_id = self._next_id()
        properties = self._extract_properties(name, arguments)
        if named_constructor:
            properties["constructor"] = named_constructor
        if widget_type == WidgetType.CUSTOM:
            properties["customType"] = name

        widget = Widget(
            id=widget_id,
            type=widget_type,
            properties=properties,
            children=self._extract_children(name, arguments),
            styling=self._extract_styling(name, arguments),
            layout=self._extract_layout(name, arguments),
            position=self._extract_position(name, properties),
        )
        logger.debug(f"Extracted {widget.id} ({name}) with {len(widget.children)} children")
        return widget

    def _next_id(self) -> str:
        self._id_counter += 1
        return f"widget_{self._id_counter}"

    def _extract_properties(self, name: str, arguments: ArgumentList) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        slot = self.positional_slots.get(name)

        for arg in arguments.arguments:
            if hasattr(arg, "name"):
                if arg.name not in CHILD_ARGUMENTS:
                    properties[arg.name] = self.extract_value(arg.value)
            elif slot and slot not in properties:
                properties[slot] = self.extract_value(arg.value)

        return properties

    def _extract_children(self, name: str, arguments: ArgumentList) -> List[Widget]:
        children: List[Widget] = []

        for arg in arguments.named():
            if arg.name == "child":
                child = self._extract_widget(arg.value)
                if child is not None:
                    children.append(child)
                else:
                    self._collector.add_warning(f"Ignoring non-widget child of {name}")
            elif arg.name == "children":
                if not isinstance(arg.value, ArrayLiteral):
                    self._collector.add_warning(f"'children' of {name} must be a list literal")
                    continue
                for element in arg.value.elements:
                    child = self._extract_widget(element)
                    if child is not None:
                        children.append(child)
                    else:
                        self._collector.add_warning(f"Ignoring non-widget element in children of {name}")

        return children

    def _extract_styling(self, name: str, arguments: ArgumentList) -> Styling:
        styling = Styling()

        for arg in arguments.named():
            if arg.name in COLOR_PROPERTIES:
                binding = self._color_binding(arg.name, arg.value)
                if binding is not None:
                    styling.colors.append(binding)
            elif arg.name == "style" and name == "Text":
                styling.typography = self._typography_binding(arg.value)

        return styling

    def _color_binding(self, prop: str, node: Node) -> Optional[ColorBinding]:
        theme_path = theme_reference_path(node)
        if theme_path:
            return ColorBinding(prop, theme_path, is_theme_reference=True, theme_path=theme_path)

        if isinstance(node, Literal) and isinstance(node.value, str):
            return ColorBinding(prop, node.value)

        resolved = resolve_color_node(node, self.color_constants)
        if resolved is not None:
            return ColorBinding(prop, resolved)

        path = property_path(node) if isinstance(node, PropertyAccess) else None
        if is_color_constant_path(path):
            self._collector.add_warning(f"Unresolved color reference: {path}")
            return ColorBinding(prop, path)
        if isinstance(node, ConstructorCall) and node.name == "Color":
            self._collector.add_warning(f"Unresolved color value for {prop}")
        return None

    def _typography_binding(self, node: Node) -> Optional[TypographyBinding]:
        theme_path = theme_reference_path(node)
        if theme_path:
            return TypographyBinding(is_theme_reference=True, theme_path=theme_path)

        if not (isinstance(node, ConstructorCall) and node.name == "TextStyle"):
            return None

        typography = TypographyBinding()
        for arg in node.arguments.named():
            value = self.extract_value(arg.value)
            if arg.name == "fontSize" and _is_number(value):
                typography.font_size = value
            elif arg.name == "fontWeight" and isinstance(value, str):
                typography.font_weight = FONT_WEIGHTS.get(value, value)
            elif arg.name == "fontFamily" and isinstance(value, str):
                typography.font_family = value
            elif arg.name == "letterSpacing" and _is_number(value):
                typography.letter_spacing = value
            elif arg.name == "height" and _is_number(value):
                typography.line_height = value
            elif arg.name == "color":
                binding = self._color_binding("color", arg.value)
                if binding is not None:
                    typography.color = binding.value
        return typography

    def _extract_layout(self, name: str, arguments: ArgumentList) -> Optional[LayoutHint]:
        if name == "Row":
            hint = LayoutHint(type="row", direction="horizontal")
        elif name == "Column":
            hint = LayoutHint(type="column", direction="vertical")
        elif name == "Stack":
            return LayoutHint(type="stack")
        elif name == "Wrap":
            direction = self.extract_value(arguments.get("direction")) if arguments.get("direction") else None
            hint = LayoutHint(type="wrap",
                              direction="vertical" if direction == "Axis.vertical" else "horizontal")
        else:
            return None

        alignment = Alignment()
        main_axis = arguments.get("mainAxisAlignment")
        if main_axis is not None:
            alignment.main_axis = map_main_axis(self.extract_value(main_axis))
        cross_axis = arguments.get("crossAxisAlignment")
        if cross_axis is not None:
            alignment.cross_axis = map_cross_axis(self.extract_value(cross_axis))
        if alignment.main_axis is not None or alignment.cross_axis is not None:
            hint.alignment = alignment

        spacing = arguments.get("spacing")
        if spacing is not None and _is_number(self.extract_value(spacing)):
            hint.spacing = self.extract_value(spacing)
        return hint

    def _extract_position(self, name: str, properties: Dict[str, Any]) -> Optional[PositionHint]:
        if name != "Positioned":
            return None
        position = PositionHint(**{key: properties[key] for key in POSITION_FIELDS
                                   if _is_number(properties.get(key))})
        return None if position.is_empty() else position

    def extract_value(self, node: Optional[Node]) -> Any:
        """
        Convert an argument expression into a plain value.

        Literals give their value, identifiers their name, access chains a
        dotted string, and nested constructors a descriptor dictionary.
        """
        if node is None:
            return None
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, PropertyAccess):
            path = property_path(node)
            if path == "EdgeInsets.zero":
                return dict(EDGE_INSETS_ZERO)
            return path
        if isinstance(node, ArrayLiteral):
            return [self.extract_value(element) for element in node.elements]
        if isinstance(node, ConstructorCall):
            return {
                "type": "constructor",
                "name": node.name,
                "properties": self._descriptor_properties(node.arguments),
            }
        if isinstance(node, MethodCall):
            insets = self._edge_insets(node)
            if insets is not None:
                return insets
            return {
                "type": "method",
                "object": property_path(node.object),
                "method": node.method.name,
                "properties": self._descriptor_properties(node.arguments),
            }
        return None

    def _descriptor_properties(self, arguments: ArgumentList) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        positional = []
        for arg in arguments.arguments:
            if hasattr(arg, "name"):
                properties[arg.name] = self.extract_value(arg.value)
            else:
                positional.append(self.extract_value(arg.value))
        if positional:
            properties["arguments"] = positional
        return properties

    def _edge_insets(self, node: MethodCall) -> Optional[Dict[str, float]]:
        if not (isinstance(node.object, Identifier) and node.object.name == "EdgeInsets"):
            return None

        positional = [self.extract_value(arg.value) for arg in node.arguments.positional()]
        named = {arg.name: self.extract_value(arg.value) for arg in node.arguments.named()}
        values = positional + list(named.values())
        if not all(_is_number(v) for v in values):
            return None

        method = node.method.name
        if method == "all" and len(positional) == 1:
            return {side: positional[0] for side in ("top", "right", "bottom", "left")}
        if method == "symmetric":
            horizontal = named.get("horizontal", 0)
            vertical = named.get("vertical", 0)
            return {"top": vertical, "right": horizontal, "bottom": vertical, "left": horizontal}
        if method == "only":
            return {side: named.get(side, 0) for side in ("top", "right", "bottom", "left")}
        if method == "fromLTRB" and len(positional) == 4:
            left, top, right, bottom = positional
            return {"top": top, "right": right, "bottom": bottom, "left": left}
        return None
