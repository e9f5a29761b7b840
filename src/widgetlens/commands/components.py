"""
Components command: report repeated widget structures.
"""
import json

from ..exceptions import ConfigurationError
from .base import BaseCommand


class ComponentsCommand(BaseCommand):
    """Detect reusable component patterns in a DSL file."""

    @classmethod
    def help(cls) -> str:
        return "Detect repeated widget structures and their variants"

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument("file", help="DSL source file")
        parser.add_argument(
            "--min-instances",
            type=int,
            help="Minimum number of instances per pattern"
        )
        parser.add_argument(
            "--min-confidence",
            type=float,
            help="Minimum confidence (0-1) for a pattern to be reported"
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the detection result as JSON"
        )

    async def execute(self) -> int:
        source = self.read_source(self.args.file)
        if source is None:
            return 1

        overrides = {}
        if self.args.min_instances is not None:
            overrides["min_instances"] = self.args.min_instances
        if self.args.min_confidence is not None:
            overrides["min_confidence"] = self.args.min_confidence
        try:
            if overrides:
                self.pipeline.component_detector.update_config(**overrides)
        except ConfigurationError as e:
            print(f"❌ {e.to_user_message()}")
            return 1

        extraction = self.pipeline.parser.extract_widgets(source)
        detector = self.pipeline.component_detector
        result = detector.detect_components(extraction.widgets)
        related = detector.find_related_patterns(result.patterns)

        if self.args.json:
            output = result.to_dict()
            output["relatedPatterns"] = [r.to_dict() for r in related]
            print(json.dumps(output, indent=2, default=str))
            return 0

        if not result.patterns:
            print("No component patterns found.")
            return 0

        print(f"\n🧩 {result.unique_patterns} patterns, {result.total_instances} instances, "
              f"{result.component_coverage:.1f}% coverage")
        for pattern in result.patterns:
            print(f"\n   {pattern.name} ({len(pattern.instances)} instances, "
                  f"confidence {pattern.confidence:.2f})")
            for variant in pattern.variants:
                print(f"      - {variant.name}: used {variant.usage_count}x")
        for pair in related:
            print(f"\n   🔗 {pair.first} ~ {pair.second} (distance {pair.distance})")
        return 0
