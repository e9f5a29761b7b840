"""
Validate command: syntax check only.
"""
from .base import BaseCommand


class ValidateCommand(BaseCommand):
    """Check that a DSL file parses."""

    @classmethod
    def help(cls) -> str:
        return "Check DSL syntax; exits with 1 when errors are found"

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument("file", help="DSL source file")

    async def execute(self) -> int:
        source = self.read_source(self.args.file)
        if source is None:
            return 1

        result = self.pipeline.parser.validate_syntax(source)
        if result.is_valid:
            print(f"✅ {self.args.file}: no syntax errors")
            return 0

        print(f"❌ {self.args.file}: {len(result.errors)} errors")
        for error in result.errors:
            print(f"   line {error.line}, column {error.column}: {error.message}")
        return 1
