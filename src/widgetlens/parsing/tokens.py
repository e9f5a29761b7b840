"""
Token definitions for the widget DSL.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class TokenKind(Enum):
    """Kinds of tokens produced by the lexer."""
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Keywords
    CLASS = "CLASS"
    CONST = "CONST"
    FINAL = "FINAL"
    VAR = "VAR"
    NEW = "NEW"
    THIS = "THIS"
    SUPER = "SUPER"
    NULL = "NULL"
    TRUE = "TRUE"
    FALSE = "FALSE"

    # Operators and punctuation
    ASSIGN = "ASSIGN"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    DOT = "DOT"
    COLON = "COLON"
    SEMICOLON = "SEMICOLON"
    COMMA = "COMMA"
    QUESTION = "QUESTION"

    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    LEFT_BRACE = "LEFT_BRACE"
    RIGHT_BRACE = "RIGHT_BRACE"
    LEFT_BRACKET = "LEFT_BRACKET"
    RIGHT_BRACKET = "RIGHT_BRACKET"
    LEFT_ANGLE = "LEFT_ANGLE"
    RIGHT_ANGLE = "RIGHT_ANGLE"

    NEWLINE = "NEWLINE"
    COMMENT = "COMMENT"
    EOF = "EOF"


KEYWORDS: Dict[str, TokenKind] = {
    "class": TokenKind.CLASS,
    "const": TokenKind.CONST,
    "final": TokenKind.FINAL,
    "var": TokenKind.VAR,
    "new": TokenKind.NEW,
    "this": TokenKind.THIS,
    "super": TokenKind.SUPER,
    "null": TokenKind.NULL,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}

PUNCTUATION: Dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    "<": TokenKind.LEFT_ANGLE,
    ">": TokenKind.RIGHT_ANGLE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "=": TokenKind.ASSIGN,
    "?": TokenKind.QUESTION,
}

# Keywords that start a new top-level declaration; used for error recovery
DECLARATION_KEYWORDS = frozenset({
    TokenKind.CLASS, TokenKind.VAR, TokenKind.FINAL, TokenKind.CONST,
})


@dataclass(frozen=True)
class Token:
    """A lexical token with its 1-based position and source offsets."""

    kind: TokenKind
    text: str
    line: int
    column: int
    start: int
    end: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "text": self.text,
            "line": self.line,
            "column": self.column,
            "start": self.start,
            "end": self.end,
        }
