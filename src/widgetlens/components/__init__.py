"""
Reusable component detection.
"""

from .detector import (
    ComponentDetector, ComponentDetectionResult, ComponentPattern, ComponentVariant,
    PropertyDifference, StylingDifference, ReusableWidget, WidgetVariant,
)
from .similarity import BKTree, RelatedPatterns, structure_simhash
from .structure import structure_hash, widget_structure

__all__ = [
    "ComponentDetector", "ComponentDetectionResult", "ComponentPattern", "ComponentVariant",
    "PropertyDifference", "StylingDifference", "ReusableWidget", "WidgetVariant",
    "BKTree", "RelatedPatterns", "structure_simhash", "structure_hash", "widget_structure",
]
