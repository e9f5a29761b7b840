"""
Widget extraction from parsed DSL expressions.
"""

from .widget_extractor import WidgetExtractor, WidgetExtractionResult
from .widget_tree import WidgetTreeBuilder, WidgetTreeAnalysis, WidgetHierarchy, TreeValidation

__all__ = [
    "WidgetExtractor", "WidgetExtractionResult",
    "WidgetTreeBuilder", "WidgetTreeAnalysis", "WidgetHierarchy", "TreeValidation",
]
