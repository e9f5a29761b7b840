"""
Themes command: extracted themes, modes and resolved references.
"""
import json

from ..theme import LIGHT, DARK, SYSTEM
from .base import BaseCommand


class ThemesCommand(BaseCommand):
    """Extract themes and resolve theme references."""

    @classmethod
    def help(cls) -> str:
        return "Extract themes and resolve theme references"

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument("file", help="DSL source file")
        parser.add_argument(
            "--resolve",
            metavar="PATH",
            help="Resolve a single theme path, e.g. colorScheme.primary"
        )
        parser.add_argument(
            "--mode",
            choices=[LIGHT, DARK, SYSTEM],
            help="Theme mode used with --resolve (default: the declared mode)"
        )

    async def execute(self) -> int:
        source = self.read_source(self.args.file)
        if source is None:
            return 1

        nodes = self.pipeline.parser.parse_expressions(source)
        analyzer = self.pipeline.theme_analyzer
        extraction = analyzer.extract_themes(nodes)

        if self.args.resolve:
            resolver = analyzer.create_multi_mode_theme_resolver(extraction.themes, extraction.modes)
            value = resolver.resolve(self.args.resolve, self.args.mode)
            if value is None:
                print(f"❌ Could not resolve {self.args.resolve}")
                return 1
            print(value)
            return 0

        output = {
            "themes": [t.to_dict() for t in extraction.themes],
            "modes": [m.to_dict() for m in extraction.modes],
            "detection": analyzer.detect_theme_modes(nodes).to_dict(),
            "mappings": analyzer.generate_theme_mode_mappings(extraction.themes, extraction.modes).to_dict(),
            "references": [
                r.to_dict() for r in analyzer.resolve_multi_mode_theme_references(
                    extraction.references, extraction.themes, extraction.modes)
            ],
            "warnings": list(extraction.warnings),
        }
        print(json.dumps(output, indent=2, default=str))
        return 0
