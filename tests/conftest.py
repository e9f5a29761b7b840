"""Fixtures for widgetlens tests."""

import os

import pytest

from widgetlens.components import ComponentDetector
from widgetlens.extraction import WidgetExtractor, WidgetTreeBuilder
from widgetlens.layout import LayoutAnalyzer
from widgetlens.parsing import DslParser
from widgetlens.pipeline import AnalysisPipeline
from widgetlens.services.configuration_service import reset_config_service
from widgetlens.theme import ThemeAnalyzer


@pytest.fixture
def parser():
    """Create a DslParser with default settings."""
    return DslParser()


@pytest.fixture
def extract(parser):
    """Parse source text and return its top-level widgets."""
    def _extract(source):
        result = parser.parse_file(source)
        assert result.success, result.errors
        return WidgetExtractor().extract_widgets(result.ast.body)
    return _extract


@pytest.fixture
def theme_analyzer():
    return ThemeAnalyzer()


@pytest.fixture
def layout_analyzer():
    return LayoutAnalyzer()


@pytest.fixture
def detector():
    return ComponentDetector()


@pytest.fixture
def tree_builder():
    return WidgetTreeBuilder()


@pytest.fixture
def pipeline():
    return AnalysisPipeline()


@pytest.fixture(autouse=True)
def clean_config_service(monkeypatch):
    """Isolate tests from WIDGETLENS_* variables and the global service."""
    for key in list(os.environ):
        if key.startswith("WIDGETLENS_"):
            monkeypatch.delenv(key, raising=False)
    reset_config_service()
    yield
    reset_config_service()
