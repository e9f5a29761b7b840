"""
Tests for the exception hierarchy.
"""

import pytest

import widgetlens.exceptions as exceptions
from widgetlens.exceptions import ConfigurationError, ParseError, ValidationError, WidgetLensError


class TestExceptions:
    """Test user-facing rendering and the hierarchy."""

    def test_parse_error_message(self):
        """Test parse errors carry their position."""
        error = ParseError("Unexpected token: )", line=2, column=7, offset=12)
        assert error.to_user_message() == "[syntax] Unexpected token: ) (line 2, column 7)"
        assert error.recorded is False

    @pytest.mark.parametrize("error_class, category", [
        (ValidationError, "validation"),
        (ConfigurationError, "configuration"),
    ])
    def test_category_prefix(self, error_class, category):
        """Test the category prefix of plain errors."""
        assert error_class("bad").to_user_message() == f"[{category}] bad"

    def test_hierarchy(self):
        """Test the set of public error classes."""
        public = {
            name for name, value in vars(exceptions).items()
            if isinstance(value, type) and issubclass(value, WidgetLensError)
        }
        assert public == {"WidgetLensError", "ParseError", "ValidationError", "ConfigurationError"}
