"""
Character-level lexer for the widget DSL.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..models import Diagnostic, DiagnosticKind
from .tokens import Token, TokenKind, KEYWORDS, PUNCTUATION

logger = logging.getLogger(__name__)

HEX_DIGITS = "0123456789abcdefABCDEF"


@dataclass
class LexResult:
    """Tokens and lexical diagnostics for one source text."""
    tokens: List[Token] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)


class Lexer:
    """
    Converts source text into a flat token stream.

    Lexing never aborts on bad input: unexpected characters are recorded and
    skipped, and the stream always ends with an EOF token.
    """

    def __init__(self, source: str = ""):
        self.source = source
        self._reset()

    def _reset(self) -> None:
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.errors: List[Diagnostic] = []

    def tokenize(self, source: str = None) -> LexResult:
        """
        Tokenize the source text.

        Args:
            source: Optional text replacing the one given to the constructor

        Returns:
            LexResult with tokens (EOF-terminated) and lexical errors
        """
        if source is not None:
            self.source = source
        self._reset()

        while not self._is_at_end():
            self._scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", self.line, self.column,
                                 self.position, self.position))

        if self.errors:
            logger.debug(f"Lexer recorded {len(self.errors)} errors")
        return LexResult(tokens=self.tokens, errors=self.errors)

    def _is_at_end(self) -> bool:
        return self.position >= len(self.source)

    def _advance(self) -> str:
        char = self.source[self.position]
        self.position += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _peek(self, ahead: int = 0) -> str:
        index = self.position + ahead
        if index >= len(self.source):
            return "\0"
        return self.source[index]

    def _scan_token(self) -> None:
        start = self.position
        line = self.line
        column = self.column
        char = self._advance()

        if char in " \r\t":
            return
        if char == "\n":
            self._add_token(TokenKind.NEWLINE, start, line, column)
            return
        if char == "/":
            if self._peek() == "/":
                self._scan_line_comment(start, line, column)
            elif self._peek() == "*":
                self._scan_block_comment(start, line, column)
            else:
                self._add_token(TokenKind.DIVIDE, start, line, column)
            return
        if char in PUNCTUATION:
            self._add_token(PUNCTUATION[char], start, line, column)
            return
        if char in "\"'":
            self._scan_string(char, start, line, column)
            return
        if self._is_digit(char):
            self._scan_number(char, start, line, column)
            return
        if self._is_identifier_start(char):
            self._scan_identifier(start, line, column)
            return

        self.errors.append(Diagnostic(f"Unexpected character: {char}", line, column,
                                      start, DiagnosticKind.LEXICAL))

    def _scan_string(self, quote: str, start: int, line: int, column: int) -> None:
        while not self._is_at_end() and self._peek() != quote:
            self._advance()

        if self._is_at_end():
            self.errors.append(Diagnostic("Unterminated string", line, column,
                                          start, DiagnosticKind.LEXICAL))
            return

        self._advance()  # closing quote
        self._add_token(TokenKind.STRING, start, line, column)

    def _scan_number(self, first: str, start: int, line: int, column: int) -> None:
        if first == "0" and self._peek() in "xX" and self._peek(1) in HEX_DIGITS:
            self._advance()
            while self._peek() in HEX_DIGITS:
                self._advance()
            self._add_token(TokenKind.NUMBER, start, line, column)
            return

        while self._is_digit(self._peek()):
            self._advance()

        if self._peek() == "." and self._is_digit(self._peek(1)):
            self._advance()
            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(TokenKind.NUMBER, start, line, column)

    def _scan_identifier(self, start: int, line: int, column: int) -> None:
        while self._is_identifier_part(self._peek()):
            self._advance()
        text = self.source[start:self.position]
        self._add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER), start, line, column)

    def _scan_line_comment(self, start: int, line: int, column: int) -> None:
        while not self._is_at_end() and self._peek() != "\n":
            self._advance()
        self._add_token(TokenKind.COMMENT, start, line, column)

    def _scan_block_comment(self, start: int, line: int, column: int) -> None:
        self._advance()  # '*'
        while not self._is_at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                break
            self._advance()
        self._add_token(TokenKind.COMMENT, start, line, column)

    def _add_token(self, kind: TokenKind, start: int, line: int, column: int) -> None:
        self.tokens.append(Token(kind, self.source[start:self.position], line, column,
                                 start, self.position))

    @staticmethod
    def _is_digit(char: str) -> bool:
        return "0" <= char <= "9"

    @staticmethod
    def _is_identifier_start(char: str) -> bool:
        return ("a" <= char <= "z") or ("A" <= char <= "Z") or char in "_$"

    @classmethod
    def _is_identifier_part(cls, char: str) -> bool:
        return cls._is_identifier_start(char) or cls._is_digit(char)


def tokenize(source: str) -> LexResult:
    """Tokenize source text with a fresh lexer."""
    return Lexer(source).tokenize()
