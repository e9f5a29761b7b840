"""
Static lookup tables shared by the analyzers.

All tables are read-only mappings. Analyzers accept replacements through
their constructors, which is how tests substitute them.
"""

from types import MappingProxyType
from typing import Mapping

from .models import WidgetType

KNOWN_WIDGETS: Mapping[str, WidgetType] = MappingProxyType({
    "Container": WidgetType.CONTAINER,
    "Row": WidgetType.ROW,
    "Column": WidgetType.COLUMN,
    "Stack": WidgetType.STACK,
    "Text": WidgetType.TEXT,
    "Image": WidgetType.IMAGE,
    "ElevatedButton": WidgetType.BUTTON,
    "TextButton": WidgetType.BUTTON,
    "OutlinedButton": WidgetType.BUTTON,
    "IconButton": WidgetType.BUTTON,
    "Card": WidgetType.CARD,
    "Scaffold": WidgetType.SCAFFOLD,
    "AppBar": WidgetType.APP_BAR,
    "CupertinoButton": WidgetType.CUPERTINO_BUTTON,
    "CupertinoNavigationBar": WidgetType.CUPERTINO_NAVIGATION_BAR,
    "Drawer": WidgetType.CUSTOM,
    "FloatingActionButton": WidgetType.CUSTOM,
    "Padding": WidgetType.CUSTOM,
    "Margin": WidgetType.CUSTOM,
    "Center": WidgetType.CUSTOM,
    "Align": WidgetType.CUSTOM,
    "Positioned": WidgetType.CUSTOM,
    "Expanded": WidgetType.CUSTOM,
    "Flexible": WidgetType.CUSTOM,
    "Wrap": WidgetType.CUSTOM,
    "ListView": WidgetType.CUSTOM,
    "GridView": WidgetType.CUSTOM,
    "SingleChildScrollView": WidgetType.CUSTOM,
    "CustomScrollView": WidgetType.CUSTOM,
    "SliverList": WidgetType.CUSTOM,
    "CupertinoPageScaffold": WidgetType.CUSTOM,
    "Material": WidgetType.CUSTOM,
    "InkWell": WidgetType.CUSTOM,
    "GestureDetector": WidgetType.CUSTOM,
    "Hero": WidgetType.CUSTOM,
    "Transform": WidgetType.CUSTOM,
})

# Constructor name -> property receiving the first positional argument
POSITIONAL_SLOTS: Mapping[str, str] = MappingProxyType({
    "Text": "text",
    "Image": "src",
    "Padding": "padding",
})

COLOR_PROPERTIES = frozenset({
    "color", "backgroundColor", "foregroundColor", "shadowColor",
    "borderColor", "focusColor", "hoverColor", "splashColor",
})

COLOR_CONSTANTS: Mapping[str, str] = MappingProxyType({
    "Colors.red": "#F44336",
    "Colors.pink": "#E91E63",
    "Colors.purple": "#9C27B0",
    "Colors.deepPurple": "#673AB7",
    "Colors.indigo": "#3F51B5",
    "Colors.blue": "#2196F3",
    "Colors.lightBlue": "#03A9F4",
    "Colors.cyan": "#00BCD4",
    "Colors.teal": "#009688",
    "Colors.green": "#4CAF50",
    "Colors.lightGreen": "#8BC34A",
    "Colors.lime": "#CDDC39",
    "Colors.yellow": "#FFEB3B",
    "Colors.amber": "#FFC107",
    "Colors.orange": "#FF9800",
    "Colors.deepOrange": "#FF5722",
    "Colors.brown": "#795548",
    "Colors.grey": "#9E9E9E",
    "Colors.blueGrey": "#607D8B",
    "Colors.black": "#000000",
    "Colors.black87": "#DD000000",
    "Colors.black54": "#8A000000",
    "Colors.black45": "#73000000",
    "Colors.black38": "#61000000",
    "Colors.black26": "#42000000",
    "Colors.black12": "#1F000000",
    "Colors.white": "#FFFFFF",
    "Colors.white70": "#B3FFFFFF",
    "Colors.white60": "#99FFFFFF",
    "Colors.white54": "#8AFFFFFF",
    "Colors.white38": "#62FFFFFF",
    "Colors.white30": "#4DFFFFFF",
    "Colors.white24": "#3DFFFFFF",
    "Colors.white12": "#1FFFFFFF",
    "Colors.white10": "#1AFFFFFF",
    "Colors.transparent": "#00000000",
})

MAIN_AXIS_ALIGNMENT: Mapping[str, str] = MappingProxyType({
    "MainAxisAlignment.start": "start",
    "MainAxisAlignment.center": "center",
    "MainAxisAlignment.end": "end",
    "MainAxisAlignment.spaceBetween": "spaceBetween",
    "MainAxisAlignment.spaceAround": "spaceAround",
    "MainAxisAlignment.spaceEvenly": "spaceEvenly",
})

CROSS_AXIS_ALIGNMENT: Mapping[str, str] = MappingProxyType({
    "CrossAxisAlignment.start": "start",
    "CrossAxisAlignment.center": "center",
    "CrossAxisAlignment.end": "end",
    "CrossAxisAlignment.stretch": "stretch",
})

DEFAULT_ALIGNMENT = "start"

FONT_WEIGHTS: Mapping[str, str] = MappingProxyType({
    "FontWeight.w100": "100",
    "FontWeight.w200": "200",
    "FontWeight.w300": "300",
    "FontWeight.w400": "400",
    "FontWeight.normal": "400",
    "FontWeight.w500": "500",
    "FontWeight.w600": "600",
    "FontWeight.w700": "700",
    "FontWeight.bold": "700",
    "FontWeight.w800": "800",
    "FontWeight.w900": "900",
})


def map_main_axis(value) -> str:
    """Map a MainAxisAlignment path to its short name, defaulting to start."""
    return MAIN_AXIS_ALIGNMENT.get(value, DEFAULT_ALIGNMENT) if isinstance(value, str) else DEFAULT_ALIGNMENT


def map_cross_axis(value) -> str:
    """Map a CrossAxisAlignment path to its short name, defaulting to start."""
    return CROSS_AXIS_ALIGNMENT.get(value, DEFAULT_ALIGNMENT) if isinstance(value, str) else DEFAULT_ALIGNMENT
