"""
Theme extraction and reference resolution.
"""

from .analyzer import ThemeAnalyzer
from .models import (
    ThemeData, ColorScheme, TextStyle, ThemeMode, ThemeReference, ThemeExtractionResult,
    ThemeReferenceResolution, MultiModeThemeResolution, ThemeModeDetection,
    ThemeModeMappings, ThemeCollection, LIGHT, DARK, SYSTEM,
)
from .resolver import ThemeResolver, MultiModeThemeResolver, resolve_theme_path

__all__ = [
    "ThemeAnalyzer", "ThemeResolver", "MultiModeThemeResolver", "resolve_theme_path",
    "ThemeData", "ColorScheme", "TextStyle", "ThemeMode", "ThemeReference",
    "ThemeExtractionResult", "ThemeReferenceResolution", "MultiModeThemeResolution",
    "ThemeModeDetection", "ThemeModeMappings", "ThemeCollection",
    "LIGHT", "DARK", "SYSTEM",
]
