"""
Theme analyzer for extracting ThemeData definitions and theme references from the AST.
"""

import logging
from typing import List, Optional, Dict, Any, Mapping

from ..exceptions import ConfigurationError
from ..models import ErrorCollector
from ..parsing.nodes import (
    Node, Identifier, Literal, ConstructorCall, PropertyAccess, MethodCall,
    ArgumentList, ArrayLiteral, property_path,
)
from ..tables import COLOR_CONSTANTS, FONT_WEIGHTS
from .colors import resolve_color_node
from .defaults import default_color_scheme, default_text_theme, default_spacing, default_border_radius
from .models import (
    ThemeData, ColorScheme, TextStyle, ThemeMode, ThemeReference, ThemeExtractionResult,
    ThemeReferenceResolution, MultiModeThemeResolution, ThemeModeDetection,
    ThemeModeMappings, ThemeCollection, COLOR_SCHEME_FIELDS, TEXT_STYLE_NAMES,
    LIGHT, DARK, SYSTEM,
)
from .paths import is_theme_reference_path
from .resolver import (
    ThemeResolver, MultiModeThemeResolver, resolve_reference, resolve_multi_mode_reference,
)

logger = logging.getLogger(__name__)

BRIGHTNESS_VALUES = {"Brightness.light": LIGHT, "Brightness.dark": DARK}
THEME_MODE_VALUES = {"ThemeMode.light": LIGHT, "ThemeMode.dark": DARK, "ThemeMode.system": SYSTEM}
COLOR_SCHEME_FACTORIES = ("light", "dark", "fromSeed")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _literal_value(node: Node) -> Any:
    return node.value if isinstance(node, Literal) else None


class ThemeAnalyzer:
    """
    Extracts ThemeData snapshots, MaterialApp theme modes and theme references.

    Every ThemeData starts from the default palette, text scale, spacing and
    radius scales; named arguments then override individual entries.
    """

    def __init__(self, color_constants: Optional[Mapping[str, str]] = None):
        self.color_constants = color_constants if color_constants is not None else COLOR_CONSTANTS
        self._collector = ErrorCollector()
        self._parsed: Dict[int, ThemeData] = {}

    def extract_themes(self, nodes: List[Node]) -> ThemeExtractionResult:
        """
        Walk top-level expressions for theme definitions and references.

        Args:
            nodes: Top-level AST expressions

        Returns:
            ThemeExtractionResult; references are recorded but not resolved
        """
        self._collector = ErrorCollector()
        self._parsed = {}
        result = ThemeExtractionResult()

        for node in nodes:
            self._analyze_node(node, result)

        result.errors = self._collector.errors
        result.warnings = self._collector.warnings
        logger.info(f"Extracted {len(result.themes)} themes, {len(result.modes)} modes, "
                    f"{len(result.references)} references")
        return result

    def _analyze_node(self, node: Optional[Node], result: ThemeExtractionResult) -> None:
        if node is None:
            return

        if isinstance(node, ConstructorCall):
            if node.name == "ThemeData":
                result.themes.append(self._parse_theme_data(node))
            elif node.name == "MaterialApp":
                self._analyze_material_app(node, result)
            self._analyze_node(node.arguments, result)
        elif isinstance(node, ArgumentList):
            for arg in node.arguments:
                self._analyze_node(arg.value, result)
        elif isinstance(node, PropertyAccess):
            path = property_path(node)
            if is_theme_reference_path(path):
                result.references.append(ThemeReference(path=path, line=node.line, column=node.column))
            else:
                self._analyze_node(node.object, result)
        elif isinstance(node, MethodCall):
            self._analyze_node(node.object, result)
            self._analyze_node(node.arguments, result)
        elif isinstance(node, ArrayLiteral):
            for element in node.elements:
                self._analyze_node(element, result)

    def _parse_theme_data(self, node: ConstructorCall) -> ThemeData:
        # MaterialApp arguments are also reached by the generic walk
        cached = self._parsed.get(id(node))
        if cached is not None:
            return cached

        brightness = self._brightness(node.arguments.get("brightness")) or LIGHT
        theme = ThemeData(
            color_scheme=default_color_scheme(brightness),
            text_theme=default_text_theme(),
            spacing=default_spacing(),
            border_radius=default_border_radius(),
            brightness=brightness,
        )

        for arg in node.arguments.named():
            if arg.name == "colorScheme":
                scheme = self._parse_color_scheme(arg.value)
                if scheme is not None:
                    theme.color_scheme = scheme
            elif arg.name == "textTheme":
                if isinstance(arg.value, ConstructorCall) and arg.value.name == "TextTheme":
                    theme.text_theme = self._parse_text_theme(arg.value)
            elif arg.name == "primarySwatch":
                path = property_path(arg.value) if isinstance(arg.value, PropertyAccess) else None
                if path and path.startswith("Colors."):
                    self._collector.add_warning(f"Material color swatch parsing not supported: {path}")

        self._parsed[id(node)] = theme
        return theme

    def _brightness(self, node: Optional[Node]) -> Optional[str]:
        if isinstance(node, PropertyAccess):
            return BRIGHTNESS_VALUES.get(property_path(node))
        return None

    def _parse_color_scheme(self, node: Node) -> Optional[ColorScheme]:
        if isinstance(node, ConstructorCall) and node.name == "ColorScheme":
            arguments = node.arguments
            seed = self._brightness(arguments.get("brightness")) or LIGHT
        elif (isinstance(node, MethodCall) and isinstance(node.object, Identifier)
              and node.object.name == "ColorScheme" and node.method.name in COLOR_SCHEME_FACTORIES):
            arguments = node.arguments
            seed = DARK if node.method.name == "dark" else LIGHT
        else:
            return None

        scheme = default_color_scheme(seed)
        for arg in arguments.named():
            if arg.name == "brightness":
                scheme.brightness = self._brightness(arg.value) or scheme.brightness
            elif arg.name in COLOR_SCHEME_FIELDS:
                color = resolve_color_node(arg.value, self.color_constants)
                if color is not None:
                    scheme.set(arg.name, color)
                else:
                    self._collector.add_warning(f"Unresolved color value for colorScheme.{arg.name}")
        return scheme

    def _parse_text_theme(self, node: ConstructorCall) -> Dict[str, TextStyle]:
        text_theme = default_text_theme()
        for arg in node.arguments.named():
            if arg.name in TEXT_STYLE_NAMES and isinstance(arg.value, ConstructorCall):
                text_theme[arg.name] = self._parse_text_style(arg.value)
        return text_theme

    def _parse_text_style(self, node: ConstructorCall) -> TextStyle:
        style = TextStyle()
        for arg in node.arguments.named():
            value = _literal_value(arg.value)
            if arg.name == "fontSize" and _is_number(value):
                style.font_size = value
            elif arg.name == "fontWeight" and isinstance(arg.value, PropertyAccess):
                style.font_weight = FONT_WEIGHTS.get(property_path(arg.value))
            elif arg.name == "fontFamily" and isinstance(value, str):
                style.font_family = value
            elif arg.name == "letterSpacing" and _is_number(value):
                style.letter_spacing = value
            elif arg.name == "wordSpacing" and _is_number(value):
                style.word_spacing = value
            elif arg.name == "height" and _is_number(value):
                style.height = value
            elif arg.name == "color":
                style.color = resolve_color_node(arg.value, self.color_constants)
        return style

    def _analyze_material_app(self, node: ConstructorCall, result: ThemeExtractionResult) -> None:
        light_theme = dark_theme = None
        mode = SYSTEM

        for arg in node.arguments.named():
            if arg.name == "theme" and isinstance(arg.value, ConstructorCall):
                light_theme = self._parse_theme_data(arg.value)
            elif arg.name == "darkTheme" and isinstance(arg.value, ConstructorCall):
                dark_theme = self._parse_theme_data(arg.value)
            elif arg.name == "themeMode" and isinstance(arg.value, PropertyAccess):
                mode = THEME_MODE_VALUES.get(property_path(arg.value), mode)

        if light_theme is not None:
            result.modes.append(ThemeMode(mode=mode, light_theme=light_theme, dark_theme=dark_theme))

    def resolve_theme_references(self, references: List[ThemeReference], themes: List[ThemeData],
                                 modes: List[ThemeMode]) -> List[ThemeReferenceResolution]:
        return [resolve_reference(reference, themes, modes) for reference in references]

    def resolve_multi_mode_theme_references(self, references: List[ThemeReference],
                                            themes: List[ThemeData],
                                            modes: List[ThemeMode]) -> List[MultiModeThemeResolution]:
        return [resolve_multi_mode_reference(reference, themes, modes) for reference in references]

    def create_theme_resolver(self, themes: List[ThemeData], modes: List[ThemeMode]) -> ThemeResolver:
        return ThemeResolver(themes, modes)

    def create_multi_mode_theme_resolver(self, themes: List[ThemeData],
                                         modes: List[ThemeMode]) -> MultiModeThemeResolver:
        return MultiModeThemeResolver(themes, modes)

    def detect_theme_modes(self, nodes: List[Node]) -> ThemeModeDetection:
        """Summarize which modes the source declares; the last MaterialApp wins."""
        extraction = self.extract_themes(nodes)
        detection = ThemeModeDetection()

        for mode in extraction.modes:
            detection.has_light_theme = mode.light_theme is not None
            detection.has_dark_theme = mode.dark_theme is not None
            detection.has_system_mode = mode.mode == SYSTEM
            detection.default_mode = mode.mode

        if not detection.has_light_theme and not detection.has_dark_theme:
            for theme in extraction.themes:
                if theme.brightness == LIGHT:
                    detection.has_light_theme = True
                elif theme.brightness == DARK:
                    detection.has_dark_theme = True

        return detection

    def generate_theme_mode_mappings(self, themes: List[ThemeData],
                                     modes: List[ThemeMode]) -> ThemeModeMappings:
        """
        Collect color, typography and spacing tokens as ``{name: {light, dark}}``.

        Uses the first ThemeMode when present, otherwise each theme under
        its own brightness.
        """
        mappings = ThemeModeMappings()

        if modes:
            sources = [(LIGHT, modes[0].light_theme)]
            if modes[0].dark_theme is not None:
                sources.append((DARK, modes[0].dark_theme))
        else:
            sources = [(theme.brightness or LIGHT, theme) for theme in themes]

        for mode_key, theme in sources:
            for name in COLOR_SCHEME_FIELDS:
                value = theme.color_scheme.get(name)
                if value:
                    mappings.colors.setdefault(name, {LIGHT: None, DARK: None})[mode_key] = value
            for name in TEXT_STYLE_NAMES:
                style = theme.text_theme.get(name)
                if style is not None:
                    mappings.typography.setdefault(name, {LIGHT: None, DARK: None})[mode_key] = style.to_dict()
            for name, value in theme.spacing.items():
                mappings.spacing.setdefault(name, {LIGHT: None, DARK: None})[mode_key] = value

        return mappings

    def build_theme_collection(self, themes: List[ThemeData], names: List[str],
                               collection_name: str = "Theme") -> ThemeCollection:
        """
        Group themes as named modes of one token collection.

        Raises:
            ConfigurationError: If the number of themes and names differ
        """
        if len(themes) != len(names):
            raise ConfigurationError("Number of themes must match number of theme names")

        collection = ThemeCollection(name=collection_name, modes=list(names))
        for name, theme in zip(names, themes):
            for color in COLOR_SCHEME_FIELDS:
                value = theme.color_scheme.get(color)
                if value:
                    collection.colors.setdefault(color, {})[name] = value
            for style_name, style in theme.text_theme.items():
                collection.typography.setdefault(style_name, {})[name] = style.to_dict()
            for step, value in theme.spacing.items():
                collection.spacing.setdefault(step, {})[name] = value
            for step, value in theme.border_radius.items():
                collection.border_radius.setdefault(step, {})[name] = value

        logger.debug(f"Built theme collection {collection_name!r} with modes {names}")
        return collection
