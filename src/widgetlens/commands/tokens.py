"""
Tokens command: dump the lexer output.
"""
import json

from .base import BaseCommand


class TokensCommand(BaseCommand):
    """Print the token stream of a DSL file."""

    @classmethod
    def help(cls) -> str:
        return "Print the tokens of a DSL file"

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument("file", help="DSL source file")
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print tokens as JSON"
        )

    async def execute(self) -> int:
        source = self.read_source(self.args.file)
        if source is None:
            return 1

        tokens = self.pipeline.parser.get_tokens(source)
        if self.args.json:
            output = [
                {"kind": t.kind.value, "text": t.text, "line": t.line, "column": t.column}
                for t in tokens
            ]
            print(json.dumps(output, indent=2))
        else:
            for token in tokens:
                print(f"{token.line:>4}:{token.column:<4} {token.kind.value:<12} {token.text!r}")
        return 0
