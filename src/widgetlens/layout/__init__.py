"""
Layout classification for extracted widgets.
"""

from .analyzer import (
    LayoutAnalyzer, LayoutType, LayoutAnalysis, LayoutAnalysisSummary, LayoutConstraints,
    FlexProperties, FlexChild, StackProperties, PositionedChild,
)

__all__ = [
    "LayoutAnalyzer", "LayoutType", "LayoutAnalysis", "LayoutAnalysisSummary",
    "LayoutConstraints", "FlexProperties", "FlexChild", "StackProperties", "PositionedChild",
]
