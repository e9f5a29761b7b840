"""widgetlens - Widget DSL analysis: widget trees, themes, layouts and components."""

__version__ = "0.1.0"

from .exceptions import WidgetLensError
from .models import Widget, WidgetType
from .parsing import DslParser
from .pipeline import AnalysisPipeline, AnalysisReport

__all__ = [
    "AnalysisPipeline",
    "AnalysisReport",
    "DslParser",
    "Widget",
    "WidgetType",
    "WidgetLensError",
]
