"""
Theme reference resolution.

A reference path is resolved against a ThemeData in three steps: walk the
literal path field by field, then try the legacy shortcut table, then the
nested ``textTheme.<style>.<prop>`` / ``colorScheme.<name>`` fallback.
Callers apply their own fallback value after that.
"""

import logging
from typing import List, Optional, Dict, Any, Callable

from .models import (
    ThemeData, ThemeMode, ThemeReference, ThemeReferenceResolution,
    MultiModeThemeResolution, LIGHT, DARK,
)
from .paths import strip_theme_accessor

logger = logging.getLogger(__name__)

KNOWN_COLOR_NAMES = frozenset({
    "transparent", "black", "white", "red", "green", "blue",
    "yellow", "cyan", "magenta", "orange", "purple", "pink",
    "brown", "grey", "gray",
})


def _with_alpha(color: Optional[str], alpha: str) -> Optional[str]:
    return color + alpha if color else None


# Legacy ThemeData property -> derived color
THEME_SHORTCUTS: Dict[str, Callable[[ThemeData], Optional[str]]] = {
    "primaryColor": lambda t: t.color_scheme.primary,
    "accentColor": lambda t: t.color_scheme.secondary,
    "secondaryColor": lambda t: t.color_scheme.secondary,
    "backgroundColor": lambda t: t.color_scheme.background,
    "scaffoldBackgroundColor": lambda t: t.color_scheme.background,
    "cardColor": lambda t: t.color_scheme.surface,
    "dividerColor": lambda t: t.color_scheme.outline or _with_alpha(t.color_scheme.on_surface, "1F"),
    "errorColor": lambda t: t.color_scheme.error,
    "disabledColor": lambda t: _with_alpha(t.color_scheme.on_surface, "61"),
    "unselectedWidgetColor": lambda t: _with_alpha(t.color_scheme.on_surface, "61"),
    "highlightColor": lambda t: _with_alpha(t.color_scheme.primary, "1F"),
    "splashColor": lambda t: _with_alpha(t.color_scheme.primary, "1F"),
    "selectedRowColor": lambda t: _with_alpha(t.color_scheme.primary, "1F"),
    "focusColor": lambda t: _with_alpha(t.color_scheme.primary, "1F"),
    "hoverColor": lambda t: _with_alpha(t.color_scheme.primary, "0A"),
}


def _format_value(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value or None
    return None


def resolve_theme_path(path: str, theme: ThemeData) -> Optional[str]:
    """
    Resolve a theme path against one theme.

    Args:
        path: Dotted path, with or without the ``Theme.of(context).`` prefix
        theme: Theme to resolve against

    Returns:
        The resolved value as a string, or None. Paths ending at a nested
        group (a whole text style, for example) give None.
    """
    clean_path = strip_theme_accessor(path)
    if not clean_path:
        return None

    current: Any = theme.to_dict()
    for part in clean_path.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            logger.debug(f"Theme path {clean_path!r} not found, trying shortcuts")
            return _resolve_shortcut(clean_path, theme)

    return _format_value(current)


def _resolve_shortcut(path: str, theme: ThemeData) -> Optional[str]:
    shortcut = THEME_SHORTCUTS.get(path)
    if shortcut is not None:
        return shortcut(theme)
    if "." in path:
        return _resolve_nested_path(path, theme)
    return None


def _resolve_nested_path(path: str, theme: ThemeData) -> Optional[str]:
    parts = path.split(".")

    if parts[0] == "textTheme" and len(parts) >= 3:
        style = theme.text_theme.get(parts[1])
        if style is not None:
            return _format_value(style.to_dict().get(parts[2]))
    elif parts[0] == "colorScheme" and len(parts) >= 2:
        return theme.color_scheme.get(parts[1])

    return None


def select_theme(themes: List[ThemeData], modes: List[ThemeMode]) -> Optional[ThemeData]:
    """Theme used for single-mode resolution: the first mode's light theme, else the first theme."""
    if modes:
        return modes[0].light_theme
    if themes:
        return themes[0]
    return None


def resolve_reference(reference: ThemeReference, themes: List[ThemeData],
                      modes: List[ThemeMode]) -> ThemeReferenceResolution:
    theme = select_theme(themes, modes)
    if theme is None:
        return ThemeReferenceResolution(reference, reference.fallback or None, None)

    value = resolve_theme_path(reference.path, theme)
    return ThemeReferenceResolution(reference, value or reference.fallback or None, theme)


def resolve_multi_mode_reference(reference: ThemeReference, themes: List[ThemeData],
                                 modes: List[ThemeMode]) -> MultiModeThemeResolution:
    """
    Resolve a reference independently for light, dark and system modes.

    With an explicit ThemeMode the system value follows the declared mode;
    without one, themes are matched by their brightness and system follows
    light.
    """
    light_value = dark_value = system_value = None
    preferred_mode = LIGHT

    if modes:
        mode = modes[0]
        preferred_mode = mode.mode
        light_value = resolve_theme_path(reference.path, mode.light_theme)
        if mode.dark_theme is not None:
            dark_value = resolve_theme_path(reference.path, mode.dark_theme)
        system_value = dark_value if preferred_mode == DARK else light_value
    elif themes:
        for theme in themes:
            value = resolve_theme_path(reference.path, theme)
            if theme.brightness == LIGHT:
                light_value = value
            elif theme.brightness == DARK:
                dark_value = value
        system_value = light_value

    fallback = reference.fallback or None
    return MultiModeThemeResolution(
        reference=reference,
        light_value=light_value or fallback,
        dark_value=dark_value or fallback,
        system_value=system_value or fallback,
        preferred_mode=preferred_mode,
    )


class ThemeResolver:
    """Resolves theme paths against the default theme of an extraction."""

    def __init__(self, themes: List[ThemeData], modes: List[ThemeMode]):
        self.themes = themes
        self.modes = modes

    def resolve(self, path: str) -> Optional[str]:
        return resolve_reference(ThemeReference(path), self.themes, self.modes).resolved_value

    def resolve_color(self, path: str) -> Optional[str]:
        """Resolve a path and accept the result only if it looks like a color."""
        value = self.resolve(path)
        if value and (value.startswith("#") or value.lower() in KNOWN_COLOR_NAMES):
            return value
        return None

    def resolve_text_style(self, path: str) -> Optional[Dict[str, Any]]:
        theme = select_theme(self.themes, self.modes)
        if theme is None:
            return None

        parts = strip_theme_accessor(path).split(".")
        if parts[0] == "textTheme" and len(parts) >= 2:
            style = theme.text_theme.get(parts[1])
            return style.to_dict() if style is not None else None
        return None


class MultiModeThemeResolver:
    """Resolves theme paths per light/dark/system mode."""

    def __init__(self, themes: List[ThemeData], modes: List[ThemeMode]):
        self.themes = themes
        self.modes = modes

    def resolve(self, path: str, mode: Optional[str] = None) -> Optional[str]:
        resolution = self.resolve_all(path)
        return resolution.value_for(mode or resolution.preferred_mode)

    def resolve_all(self, path: str) -> MultiModeThemeResolution:
        return resolve_multi_mode_reference(ThemeReference(path), self.themes, self.modes)

    def has_mode(self, mode: str) -> bool:
        if self.modes:
            theme_mode = self.modes[0]
            return theme_mode.light_theme is not None if mode == LIGHT else theme_mode.dark_theme is not None
        return any(theme.brightness == mode for theme in self.themes)

    def available_modes(self) -> List[str]:
        return [mode for mode in (LIGHT, DARK) if self.has_mode(mode)]

    def preferred_mode(self) -> str:
        if self.modes:
            return self.modes[0].mode
        return LIGHT
