"""
Exception classes for widgetlens.
"""


class WidgetLensError(Exception):
    """Base exception for all widgetlens errors."""

    category = "general"

    def to_user_message(self) -> str:
        """Render the error for display to a user."""
        return f"[{self.category}] {self}"


class ParseError(WidgetLensError):
    """Exception raised when a statement cannot be parsed."""

    category = "syntax"

    def __init__(self, message: str, line: int = 0, column: int = 0,
                 offset: int = 0, recorded: bool = False):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset
        # Set when the parser already stored a diagnostic for this failure
        self.recorded = recorded

    def to_user_message(self) -> str:
        return f"[{self.category}] {self.message} (line {self.line}, column {self.column})"


class ValidationError(WidgetLensError):
    """Exception raised for validation errors."""

    category = "validation"


class ConfigurationError(WidgetLensError):
    """Exception raised for configuration errors."""

    category = "configuration"
