"""
Analyze command: run the whole pipeline over a DSL file.
"""
import argparse
import json

from ..exceptions import ValidationError
from .base import BaseCommand


class AnalyzeCommand(BaseCommand):
    """Full analysis report for one file."""

    @classmethod
    def help(cls) -> str:
        return "Run every analysis stage and print the report"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser):
        parser.add_argument("file", help="DSL source file")
        parser.add_argument(
            "--format",
            choices=["json", "summary"],
            default="json",
            help="Output format (default: json)"
        )

    async def execute(self) -> int:
        source = self.read_source(self.args.file)
        if source is None:
            return 1

        try:
            report = self.pipeline.analyze(source)
        except ValidationError as e:
            print(f"❌ {e.to_user_message()}")
            return 1

        if self.args.format == "json":
            print(json.dumps(report.to_dict(), indent=2, default=str))
        else:
            self._display_summary(report)
        return 0 if report.success else 1

    def _display_summary(self, report):
        print(f"\n📊 Analysis of {self.args.file}")
        print(f"   Widgets: {report.tree.total_nodes if report.tree else 0} "
              f"({len(report.widgets)} top-level)")
        if report.tree:
            print(f"   Max depth: {report.tree.max_depth}")
        print(f"   Themes: {len(report.themes.themes)}, modes: {len(report.themes.modes)}, "
              f"references: {len(report.theme_resolutions)}")
        print(f"   Auto layout candidates: {len(report.layout.auto_layout_candidates)}"
              f"/{report.layout.total_layouts}")
        print(f"   Component patterns: {report.components.unique_patterns} "
              f"({report.components.component_coverage:.1f}% coverage)")

        for error in report.errors:
            print(f"   ❌ {error.message} (line {error.line}, column {error.column})")
        for warning in report.warnings:
            print(f"   ⚠️  {warning}")
