"""
Theme data structures.

ThemeData mirrors the design-token snapshot for one brightness. Its
``to_dict`` form uses the DSL's camelCase names and is the tree that theme
reference paths are walked against.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from ..models import Diagnostic

LIGHT = "light"
DARK = "dark"
SYSTEM = "system"

COLOR_SCHEME_FIELDS = (
    "primary", "onPrimary", "secondary", "onSecondary",
    "error", "onError", "background", "onBackground",
    "surface", "onSurface", "surfaceVariant", "onSurfaceVariant",
    "outline", "shadow",
)

TEXT_STYLE_NAMES = (
    "displayLarge", "displayMedium", "displaySmall",
    "headlineLarge", "headlineMedium", "headlineSmall",
    "titleLarge", "titleMedium", "titleSmall",
    "bodyLarge", "bodyMedium", "bodySmall",
    "labelLarge", "labelMedium", "labelSmall",
)


@dataclass
class ColorScheme:
    """Named colors of one theme; the last four are optional."""

    brightness: str
    primary: str
    on_primary: str
    secondary: str
    on_secondary: str
    error: str
    on_error: str
    background: str
    on_background: str
    surface: str
    on_surface: str
    surface_variant: Optional[str] = None
    on_surface_variant: Optional[str] = None
    outline: Optional[str] = None
    shadow: Optional[str] = None

    _ATTRIBUTES = {
        "primary": "primary", "onPrimary": "on_primary",
        "secondary": "secondary", "onSecondary": "on_secondary",
        "error": "error", "onError": "on_error",
        "background": "background", "onBackground": "on_background",
        "surface": "surface", "onSurface": "on_surface",
        "surfaceVariant": "surface_variant", "onSurfaceVariant": "on_surface_variant",
        "outline": "outline", "shadow": "shadow",
    }

    def get(self, name: str) -> Optional[str]:
        """Look up a color by its DSL name (``onPrimary``)."""
        attribute = self._ATTRIBUTES.get(name)
        return getattr(self, attribute) if attribute else None

    def set(self, name: str, value: str) -> bool:
        attribute = self._ATTRIBUTES.get(name)
        if attribute is None:
            return False
        setattr(self, attribute, value)
        return True

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"brightness": self.brightness}
        for name in COLOR_SCHEME_FIELDS:
            value = self.get(name)
            if value is not None:
                data[name] = value
        return data


@dataclass
class TextStyle:
    font_size: Optional[float] = None
    font_weight: Optional[str] = None
    font_family: Optional[str] = None
    letter_spacing: Optional[float] = None
    word_spacing: Optional[float] = None
    height: Optional[float] = None
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        fields = {
            "fontSize": self.font_size,
            "fontWeight": self.font_weight,
            "fontFamily": self.font_family,
            "letterSpacing": self.letter_spacing,
            "wordSpacing": self.word_spacing,
            "height": self.height,
            "color": self.color,
        }
        return {k: v for k, v in fields.items() if v is not None}


@dataclass
class ThemeData:
    """Resolved design tokens for one brightness."""

    color_scheme: ColorScheme
    text_theme: Dict[str, TextStyle] = field(default_factory=dict)
    spacing: Dict[str, float] = field(default_factory=dict)
    border_radius: Dict[str, float] = field(default_factory=dict)
    brightness: str = LIGHT
    primary_swatch: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "colorScheme": self.color_scheme.to_dict(),
            "textTheme": {name: style.to_dict() for name, style in self.text_theme.items()},
            "spacing": dict(self.spacing),
            "borderRadius": dict(self.border_radius),
            "brightness": self.brightness,
        }
        if self.primary_swatch is not None:
            data["primarySwatch"] = dict(self.primary_swatch)
        return data


@dataclass
class ThemeMode:
    """Light theme, optional dark theme and the declared default mode."""

    mode: str
    light_theme: ThemeData
    dark_theme: Optional[ThemeData] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "lightTheme": self.light_theme.to_dict(),
            "darkTheme": self.dark_theme.to_dict() if self.dark_theme else None,
        }


@dataclass
class ThemeReference:
    """An unresolved path into the current theme."""

    path: str
    fallback: Optional[str] = None
    line: int = 0
    column: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"path": self.path, "line": self.line, "column": self.column}
        if self.fallback is not None:
            data["fallback"] = self.fallback
        return data


@dataclass
class ThemeExtractionResult:
    themes: List[ThemeData] = field(default_factory=list)
    references: List[ThemeReference] = field(default_factory=list)
    modes: List[ThemeMode] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "themes": [t.to_dict() for t in self.themes],
            "references": [r.to_dict() for r in self.references],
            "modes": [m.to_dict() for m in self.modes],
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }


@dataclass
class ThemeReferenceResolution:
    reference: ThemeReference
    resolved_value: Optional[str]
    theme_source: Optional[ThemeData] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference": self.reference.to_dict(),
            "resolvedValue": self.resolved_value,
            "themeBrightness": self.theme_source.brightness if self.theme_source else None,
        }


@dataclass
class MultiModeThemeResolution:
    reference: ThemeReference
    light_value: Optional[str]
    dark_value: Optional[str]
    system_value: Optional[str]
    preferred_mode: str = LIGHT

    def value_for(self, mode: str) -> Optional[str]:
        if mode == DARK:
            return self.dark_value
        if mode == SYSTEM:
            return self.system_value
        return self.light_value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference": self.reference.to_dict(),
            "lightValue": self.light_value,
            "darkValue": self.dark_value,
            "systemValue": self.system_value,
            "preferredMode": self.preferred_mode,
        }


@dataclass
class ThemeModeDetection:
    has_light_theme: bool = False
    has_dark_theme: bool = False
    has_system_mode: bool = False
    default_mode: str = LIGHT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasLightTheme": self.has_light_theme,
            "hasDarkTheme": self.has_dark_theme,
            "hasSystemMode": self.has_system_mode,
            "defaultMode": self.default_mode,
        }


@dataclass
class ThemeModeMappings:
    """Per-token light/dark values, keyed by token name."""

    colors: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    typography: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    spacing: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"colors": self.colors, "typography": self.typography, "spacing": self.spacing}


@dataclass
class ThemeCollection:
    """Themes grouped as named modes of one token collection."""

    name: str
    modes: List[str]
    colors: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    typography: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    spacing: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    border_radius: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "modes": list(self.modes),
            "colors": self.colors,
            "typography": self.typography,
            "spacing": self.spacing,
            "borderRadius": self.border_radius,
        }
