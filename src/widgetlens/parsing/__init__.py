"""
Lexing and parsing of the widget DSL.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from ..models import Diagnostic
from ..services.configuration_service import ParserConfig
from .lexer import Lexer, LexResult, tokenize
from .nodes import (
    Node, Program, Identifier, Literal, ConstructorCall, PropertyAccess, MethodCall,
    ArgumentList, NamedArgument, PositionalArgument, ArrayLiteral, Expression,
    child_nodes, property_path, print_node, node_to_dict,
)
from .parser import Parser, parse_tokens
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Outcome of parsing one source text."""
    success: bool
    ast: Optional[Program] = None
    errors: List[Diagnostic] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "ast": node_to_dict(self.ast) if self.ast else None,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[Diagnostic] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }


class DslParser:
    """
    Front door to the lexer and parser.

    Lexical errors mean the token stream cannot be trusted, so with
    ``strict_lexing`` enabled no AST is produced for such input.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.logger = logging.getLogger(__name__)

    def parse_file(self, content: str) -> ParseResult:
        """
        Parse source text into an AST.

        Args:
            content: DSL source text

        Returns:
            ParseResult; ``success`` is False when any error was recorded
        """
        lex_result = Lexer(content).tokenize()
        errors = list(lex_result.errors)

        if errors and self.config.strict_lexing:
            self.logger.info(f"Lexing failed with {len(errors)} errors, skipping parse")
            return ParseResult(success=False, ast=None, errors=errors)

        program, parse_errors = Parser(lex_result.tokens).parse()
        errors.extend(parse_errors)

        return ParseResult(success=not errors, ast=program, errors=errors)

    def parse_expressions(self, content: str) -> List[Expression]:
        """Top-level expressions of the source, or an empty list."""
        result = self.parse_file(content)
        if result.ast is not None:
            return result.ast.body
        return []

    def validate_syntax(self, content: str) -> ValidationResult:
        result = self.parse_file(content)
        return ValidationResult(is_valid=result.success, errors=result.errors,
                                warnings=result.warnings)

    def get_tokens(self, content: str) -> List[Token]:
        return Lexer(content).tokenize().tokens

    def extract_widgets(self, content: str):
        """Parse the source and run widget extraction on it."""
        from ..extraction.widget_extractor import WidgetExtractor, WidgetExtractionResult

        result = self.parse_file(content)
        if not result.success or result.ast is None:
            return WidgetExtractionResult(widgets=[], errors=result.errors, warnings=[])

        return WidgetExtractor().extract_widgets(result.ast.body)


__all__ = [
    "DslParser", "ParseResult", "ValidationResult",
    "Lexer", "LexResult", "tokenize", "Parser", "parse_tokens",
    "Token", "TokenKind",
    "Node", "Program", "Identifier", "Literal", "ConstructorCall", "PropertyAccess",
    "MethodCall", "ArgumentList", "NamedArgument", "PositionalArgument", "ArrayLiteral",
    "Expression", "child_nodes", "property_path", "print_node", "node_to_dict",
]
