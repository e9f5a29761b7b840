"""
Tests for the widget DSL lexer.
"""

from widgetlens.models import DiagnosticKind
from widgetlens.parsing import Lexer, TokenKind, tokenize


def kinds(source):
    return [t.kind for t in tokenize(source).tokens if t.kind not in (TokenKind.NEWLINE,)]


class TestLexer:
    """Test tokenization."""

    def test_constructor_call_tokens(self):
        """Test tokens of a simple constructor call."""
        result = tokenize("Text('Hello')")

        assert [t.kind for t in result.tokens] == [
            TokenKind.IDENTIFIER, TokenKind.LEFT_PAREN, TokenKind.STRING,
            TokenKind.RIGHT_PAREN, TokenKind.EOF,
        ]
        assert result.tokens[2].text == "'Hello'"
        assert result.errors == []

    def test_positions_are_one_based(self):
        """Test line and column tracking across newlines."""
        result = tokenize("Row(\n  children: [])")
        children = next(t for t in result.tokens if t.text == "children")

        assert children.line == 2
        assert children.column == 3
        assert result.tokens[0].start == 0
        assert result.tokens[0].end == 3

    def test_hex_number(self):
        """Test hexadecimal integer literals lex as one number."""
        result = tokenize("Color(0xFF2196F3)")

        number = result.tokens[2]
        assert number.kind == TokenKind.NUMBER
        assert number.text == "0xFF2196F3"

    def test_decimal_number(self):
        """Test decimal numbers keep their fraction."""
        result = tokenize("1.5")
        assert result.tokens[0].kind == TokenKind.NUMBER
        assert result.tokens[0].text == "1.5"

    def test_keywords(self):
        """Test keyword recognition; other reserved words stay identifiers."""
        assert kinds("const final var null true false String") == [
            TokenKind.CONST, TokenKind.FINAL, TokenKind.VAR, TokenKind.NULL,
            TokenKind.TRUE, TokenKind.FALSE, TokenKind.IDENTIFIER, TokenKind.EOF,
        ]

    def test_comments(self):
        """Test line and block comments become comment tokens."""
        result = tokenize("// note\n/* block */ Text('a')")
        comment_kinds = [t.kind for t in result.tokens if t.kind == TokenKind.COMMENT]
        assert len(comment_kinds) == 2

    def test_unexpected_character_is_skipped(self):
        """Test scanning continues past an unexpected character."""
        result = tokenize("a @ b")

        assert [t.text for t in result.tokens if t.kind == TokenKind.IDENTIFIER] == ["a", "b"]
        assert len(result.errors) == 1
        assert result.errors[0].message == "Unexpected character: @"
        assert result.errors[0].kind == DiagnosticKind.LEXICAL
        assert result.errors[0].column == 3

    def test_unterminated_string(self):
        """Test an unterminated string records an error at the opening quote."""
        result = tokenize("Text('abc")

        assert len(result.errors) == 1
        assert result.errors[0].message == "Unterminated string"
        assert result.errors[0].column == 6
        assert all(t.kind != TokenKind.STRING for t in result.tokens)
        assert result.tokens[-1].kind == TokenKind.EOF

    def test_lexer_reuse(self):
        """Test a lexer instance can tokenize another source."""
        lexer = Lexer("a")
        lexer.tokenize()
        result = lexer.tokenize("b c")
        assert [t.text for t in result.tokens[:-1]] == ["b", "c"]
