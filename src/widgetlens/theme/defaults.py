"""
Default Material design tokens used to pre-seed extracted themes.
"""

from typing import Dict

from .models import ColorScheme, TextStyle, DARK, LIGHT

_LIGHT_COLORS = {
    "primary": "#6200EE",
    "onPrimary": "#FFFFFF",
    "secondary": "#03DAC6",
    "onSecondary": "#000000",
    "error": "#B00020",
    "onError": "#FFFFFF",
    "background": "#FFFFFF",
    "onBackground": "#000000",
    "surface": "#FFFFFF",
    "onSurface": "#000000",
    "surfaceVariant": "#F5F5F5",
    "onSurfaceVariant": "#000000",
    "outline": "#737373",
    "shadow": "#000000",
}

_DARK_COLORS = {
    "primary": "#BB86FC",
    "onPrimary": "#000000",
    "secondary": "#03DAC6",
    "onSecondary": "#000000",
    "error": "#CF6679",
    "onError": "#000000",
    "background": "#121212",
    "onBackground": "#FFFFFF",
    "surface": "#121212",
    "onSurface": "#FFFFFF",
    "surfaceVariant": "#1E1E1E",
    "onSurfaceVariant": "#FFFFFF",
    "outline": "#8C8C8C",
    "shadow": "#000000",
}

# (fontSize, fontWeight)
_TEXT_SCALE = {
    "displayLarge": (57, "400"),
    "displayMedium": (45, "400"),
    "displaySmall": (36, "400"),
    "headlineLarge": (32, "400"),
    "headlineMedium": (28, "400"),
    "headlineSmall": (24, "400"),
    "titleLarge": (22, "400"),
    "titleMedium": (16, "500"),
    "titleSmall": (14, "500"),
    "bodyLarge": (16, "400"),
    "bodyMedium": (14, "400"),
    "bodySmall": (12, "400"),
    "labelLarge": (14, "500"),
    "labelMedium": (12, "500"),
    "labelSmall": (11, "500"),
}

_SPACING = {"xs": 4, "sm": 8, "md": 16, "lg": 24, "xl": 32, "xxl": 48}

_BORDER_RADIUS = {"none": 0, "sm": 4, "md": 8, "lg": 12, "xl": 16, "full": 9999}


def default_color_scheme(brightness: str = LIGHT) -> ColorScheme:
    scheme = ColorScheme(brightness=brightness, **{k: "" for k in (
        "primary", "on_primary", "secondary", "on_secondary", "error", "on_error",
        "background", "on_background", "surface", "on_surface")})
    for name, value in (_DARK_COLORS if brightness == DARK else _LIGHT_COLORS).items():
        scheme.set(name, value)
    return scheme


def default_text_theme() -> Dict[str, TextStyle]:
    return {name: TextStyle(font_size=size, font_weight=weight)
            for name, (size, weight) in _TEXT_SCALE.items()}


def default_spacing() -> Dict[str, float]:
    return dict(_SPACING)


def default_border_radius() -> Dict[str, float]:
    return dict(_BORDER_RADIUS)
