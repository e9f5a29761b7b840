"""
Tests for the end-to-end analysis pipeline.
"""

import pytest

from widgetlens.exceptions import ValidationError
from widgetlens.models import DiagnosticKind, WidgetType
from widgetlens.pipeline import AnalysisPipeline
from widgetlens.services.configuration_service import ParserConfig, WidgetLensConfig

APP = """
MaterialApp(
  theme: ThemeData(colorScheme: ColorScheme.light(primary: Colors.blue)),
  darkTheme: ThemeData(colorScheme: ColorScheme.dark(primary: Colors.purple)),
  themeMode: ThemeMode.dark,
  home: Scaffold(body: Text('x', style: Theme.of(context).textTheme.bodyLarge)),
)
Card(child: Text('Hi'))
Card(child: Text('Hi'))
"""


class TestAnalysisPipeline:
    """Test AnalysisPipeline.analyze."""

    def test_full_report(self, pipeline):
        """Test every stage contributes to the report."""
        report = pipeline.analyze(APP)

        assert report.success
        assert [w.type for w in report.widgets] == [WidgetType.CUSTOM, WidgetType.CARD, WidgetType.CARD]
        assert report.tree.total_nodes == 5
        assert len(report.themes.themes) == 2
        assert len(report.themes.modes) == 1
        assert len(report.theme_resolutions) == 1
        assert report.components.unique_patterns == 1
        assert report.components.patterns[0].name == "Card"
        assert "Unknown widget type: MaterialApp" in report.warnings

    def test_to_dict(self, pipeline):
        """Test the serialized report layout."""
        data = pipeline.analyze(APP).to_dict()

        assert set(data) == {
            "success", "widgets", "tree", "themes", "layout", "components",
            "relatedPatterns", "errors", "warnings",
        }
        assert set(data["themes"]) == {"themes", "modes", "references"}
        assert data["success"] is True
        assert data["components"]["uniquePatterns"] == 1

    def test_syntax_error_isolated(self, pipeline):
        """Test a broken expression does not stop the rest."""
        report = pipeline.analyze("Container(width: )\nText('ok')")

        assert not report.success
        assert report.errors[0].message == "Unexpected token: )"
        assert WidgetType.TEXT in [w.type for w in report.widgets]

    def test_strict_lexing_stops_pipeline(self, pipeline):
        """Test lexical errors yield no widgets when lexing is strict."""
        report = pipeline.analyze("Text('a') @")

        assert not report.success
        assert report.widgets == []
        assert report.tree is None
        assert report.errors[0].kind == DiagnosticKind.LEXICAL
        assert report.to_dict()["tree"] is None

    def test_lenient_lexing_continues(self):
        """Test lexical errors are reported alongside results when lenient."""
        pipeline = AnalysisPipeline(WidgetLensConfig(parser=ParserConfig(strict_lexing=False)))
        report = pipeline.analyze("Text('a')\n@\nText('b')")

        assert not report.success
        assert report.errors[0].kind == DiagnosticKind.LEXICAL
        assert len(report.widgets) == 2

    def test_source_length_limit(self):
        """Test oversized sources are rejected."""
        pipeline = AnalysisPipeline(WidgetLensConfig(parser=ParserConfig(max_source_length=10)))

        with pytest.raises(ValidationError):
            pipeline.analyze("Text('hello world')")

    def test_source_length_limit_disabled(self):
        """Test a zero limit disables the check."""
        pipeline = AnalysisPipeline(WidgetLensConfig(parser=ParserConfig(max_source_length=0)))
        assert pipeline.analyze("Text('hello world')").success

    def test_empty_source(self, pipeline):
        """Test empty input produces an empty, successful report."""
        report = pipeline.analyze("")

        assert report.success
        assert report.widgets == []
        assert report.components.patterns == []

    def test_analyze_file(self, pipeline, tmp_path):
        """Test analyzing a file from disk."""
        path = tmp_path / "ui.wdsl"
        path.write_text("Row(children: [Text('a'), Text('b')])", encoding="utf-8")

        report = pipeline.analyze_file(str(path))
        assert report.layout.total_layouts == 3
