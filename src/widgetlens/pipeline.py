"""
End-to-end analysis: parse, extract, then run the theme, layout and
component stages over the result.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional

from .components import ComponentDetector, ComponentDetectionResult, RelatedPatterns
from .exceptions import ValidationError
from .extraction import WidgetExtractor, WidgetTreeBuilder, WidgetTreeAnalysis
from .layout import LayoutAnalyzer, LayoutAnalysisSummary
from .models import Diagnostic, ErrorCollector, Widget
from .parsing import DslParser, ParseResult
from .services.configuration_service import WidgetLensConfig
from .theme import ThemeAnalyzer, ThemeExtractionResult, MultiModeThemeResolution

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """Everything the pipeline learned about one source text."""
    parse: ParseResult
    widgets: List[Widget] = field(default_factory=list)
    tree: Optional[WidgetTreeAnalysis] = None
    themes: ThemeExtractionResult = field(default_factory=ThemeExtractionResult)
    theme_resolutions: List[MultiModeThemeResolution] = field(default_factory=list)
    layout: LayoutAnalysisSummary = field(default_factory=LayoutAnalysisSummary)
    components: ComponentDetectionResult = field(default_factory=ComponentDetectionResult)
    related_patterns: List[RelatedPatterns] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "widgets": [w.to_dict() for w in self.widgets],
            "tree": self.tree.to_dict() if self.tree else None,
            "themes": {
                "themes": [t.to_dict() for t in self.themes.themes],
                "modes": [m.to_dict() for m in self.themes.modes],
                "references": [r.to_dict() for r in self.theme_resolutions],
            },
            "layout": self.layout.to_dict(),
            "components": self.components.to_dict(),
            "relatedPatterns": [r.to_dict() for r in self.related_patterns],
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }


class AnalysisPipeline:
    """
    Runs every analysis stage over one source text.

    A syntax error in one top-level expression does not stop the others:
    downstream stages run on whatever the parser recovered, and all
    diagnostics are reported together in stage order.
    """

    def __init__(self, config: Optional[WidgetLensConfig] = None):
        self.config = config or WidgetLensConfig()
        self.parser = DslParser(self.config.parser)
        self.extractor = WidgetExtractor()
        self.tree_builder = WidgetTreeBuilder()
        self.theme_analyzer = ThemeAnalyzer()
        self.layout_analyzer = LayoutAnalyzer()
        self.component_detector = ComponentDetector(self.config.detection)
        self.logger = logging.getLogger(__name__)

    def analyze(self, source: str) -> AnalysisReport:
        """
        Analyze DSL source text.

        Args:
            source: DSL source text

        Returns:
            AnalysisReport with best-effort results and merged diagnostics

        Raises:
            ValidationError: If the source exceeds the configured length limit
        """
        self.check_source(source)

        collector = ErrorCollector()
        parse_result = self.parser.parse_file(source)
        collector.extend(parse_result.errors, parse_result.warnings)

        report = AnalysisReport(parse=parse_result)
        if parse_result.ast is None:
            self.logger.info("No AST produced, skipping downstream stages")
            report.errors = collector.errors
            report.warnings = collector.warnings
            return report

        body = parse_result.ast.body

        extraction = self.extractor.extract_widgets(body)
        collector.extend(extraction.errors, extraction.warnings)
        report.widgets = extraction.widgets
        report.tree = self.tree_builder.build_trees(extraction.widgets)

        themes = self.theme_analyzer.extract_themes(body)
        collector.extend(themes.errors, themes.warnings)
        report.themes = themes
        report.theme_resolutions = self.theme_analyzer.resolve_multi_mode_theme_references(
            themes.references, themes.themes, themes.modes)

        report.layout = self.layout_analyzer.analyze_layouts(extraction.widgets)

        report.components = self.component_detector.detect_components(extraction.widgets)
        report.related_patterns = self.component_detector.find_related_patterns(
            report.components.patterns)

        report.errors = collector.errors
        report.warnings = collector.warnings
        self.logger.info(f"Analysis finished: {len(report.widgets)} widgets, "
                         f"{len(report.errors)} errors, {len(report.warnings)} warnings")
        return report

    def analyze_file(self, path: str) -> AnalysisReport:
        return self.analyze(Path(path).read_text(encoding="utf-8"))

    def check_source(self, source: str) -> None:
        """
        Raises:
            ValidationError: If the source exceeds ``max_source_length``
        """
        limit = self.config.parser.max_source_length
        if limit and len(source) > limit:
            raise ValidationError(f"Source is {len(source)} characters long, limit is {limit}")
