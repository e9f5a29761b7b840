"""
Recursive-descent parser for the widget DSL.

Grammar (no operators beyond call and access chaining):

    expression   := primary ( '(' argumentList ')' | '.' identifier )*
    argumentList := ( argument ( ',' argument )* ','? )?
    argument     := identifier ':' expression | expression
    primary      := literal | identifier | '[' elements ']' | '(' expression ')'
"""

import logging
from typing import List, Optional, Tuple

from ..exceptions import ParseError
from ..models import Diagnostic, DiagnosticKind
from .nodes import (
    Program, Identifier, Literal, ConstructorCall, PropertyAccess, MethodCall,
    ArgumentList, NamedArgument, PositionalArgument, ArrayLiteral, Expression, Argument,
)
from .tokens import Token, TokenKind, DECLARATION_KEYWORDS

logger = logging.getLogger(__name__)


class Parser:
    """
    Builds a Program from a token stream.

    A failing top-level statement records one syntax error and is skipped;
    parsing resumes at the next top-level boundary.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = [t for t in tokens if t.kind != TokenKind.COMMENT]
        if not self.tokens or self.tokens[-1].kind != TokenKind.EOF:
            last = self.tokens[-1] if self.tokens else None
            position = last.end if last else 0
            line = last.line if last else 1
            column = (last.column + len(last.text)) if last else 1
            self.tokens.append(Token(TokenKind.EOF, "", line, column, position, position))
        self.current = 0
        self.errors: List[Diagnostic] = []

    def parse(self) -> Tuple[Program, List[Diagnostic]]:
        """
        Parse all top-level statements.

        Returns:
            Tuple of (program, syntax errors)
        """
        body: List[Expression] = []

        while not self._is_at_end():
            if self._match(TokenKind.NEWLINE, TokenKind.SEMICOLON):
                continue

            statement = self._parse_statement()
            if statement is not None:
                body.append(statement)

        end = self.tokens[-1].end
        program = Program(body=body, line=1, column=1, start=0, end=end)
        logger.debug(f"Parsed {len(body)} top-level expressions with {len(self.errors)} errors")
        return program, self.errors

    def _parse_statement(self) -> Optional[Expression]:
        statement_start = self.current
        try:
            return self._parse_expression()
        except ParseError as e:
            if not e.recorded:
                self._record(e)
            self._synchronize(statement_start)
            return None

    def _parse_expression(self) -> Expression:
        expr = self._parse_primary()

        while True:
            if self._check(TokenKind.LEFT_PAREN):
                if isinstance(expr, Identifier):
                    expr = self._finish_constructor_call(expr)
                elif isinstance(expr, PropertyAccess):
                    expr = self._finish_method_call(expr)
                else:
                    break
            elif self._check(TokenKind.DOT):
                self._advance()
                if not self._check(TokenKind.IDENTIFIER):
                    raise self._error("Expected property name after '.'")
                name_token = self._advance()
                expr = PropertyAccess(
                    object=expr,
                    property=self._identifier(name_token),
                    line=expr.line, column=expr.column, start=expr.start, end=name_token.end,
                )
            else:
                break

        return expr

    def _finish_constructor_call(self, name: Identifier) -> ConstructorCall:
        self._consume(TokenKind.LEFT_PAREN, "Expected '(' after constructor name")
        arguments = self._parse_argument_list()
        self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after arguments")
        return ConstructorCall(
            name=name.name, arguments=arguments,
            line=name.line, column=name.column, start=name.start, end=self._previous().end,
        )

    def _finish_method_call(self, access: PropertyAccess) -> MethodCall:
        target = access.object
        self._consume(TokenKind.LEFT_PAREN, "Expected '(' after method name")
        arguments = self._parse_argument_list()
        self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after arguments")
        return MethodCall(
            object=target, method=access.property, arguments=arguments,
            line=target.line, column=target.column, start=target.start, end=self._previous().end,
        )

    def _parse_argument_list(self) -> ArgumentList:
        first = self._peek()
        arguments: List[Argument] = []

        self._skip_newlines()
        if not self._check(TokenKind.RIGHT_PAREN):
            while True:
                self._skip_newlines()
                if self._check(TokenKind.RIGHT_PAREN):
                    break  # trailing comma
                arguments.append(self._parse_argument())
                self._skip_newlines()
                if not self._match(TokenKind.COMMA):
                    break
        self._skip_newlines()

        return ArgumentList(arguments=arguments, line=first.line, column=first.column,
                            start=first.start, end=self._peek().start)

    def _parse_argument(self) -> Argument:
        first = self._peek()

        if self._check(TokenKind.IDENTIFIER) and self._check_next(TokenKind.COLON):
            name = self._advance().text
            self._consume(TokenKind.COLON, "Expected ':' after parameter name")
            self._skip_newlines()
            value = self._parse_expression()
            return NamedArgument(name=name, value=value, line=first.line, column=first.column,
                                 start=first.start, end=value.end)

        value = self._parse_expression()
        return PositionalArgument(value=value, line=first.line, column=first.column,
                                  start=first.start, end=value.end)

    def _parse_primary(self) -> Expression:
        # `const` and `new` prefixes do not change the shape of a constructor call
        while self._match(TokenKind.CONST, TokenKind.NEW):
            pass

        if self._match(TokenKind.TRUE):
            return self._literal(True, self._previous())
        if self._match(TokenKind.FALSE):
            return self._literal(False, self._previous())
        if self._match(TokenKind.NULL):
            return self._literal(None, self._previous())
        if self._match(TokenKind.NUMBER):
            token = self._previous()
            return self._literal(self._number_value(token.text), token)
        if self._match(TokenKind.STRING):
            token = self._previous()
            return self._literal(token.text[1:-1], token)
        if self._match(TokenKind.LEFT_BRACKET):
            return self._parse_array_literal()
        if self._match(TokenKind.IDENTIFIER):
            return self._identifier(self._previous())
        if self._match(TokenKind.LEFT_PAREN):
            expr = self._parse_expression()
            self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after expression")
            return expr

        raise self._error(f"Unexpected token: {self._peek().text or 'end of input'}")

    def _parse_array_literal(self) -> ArrayLiteral:
        opening = self._previous()
        elements: List[Expression] = []

        self._skip_newlines()
        if not self._check(TokenKind.RIGHT_BRACKET):
            while True:
                self._skip_newlines()
                if self._check(TokenKind.RIGHT_BRACKET):
                    break
                elements.append(self._parse_expression())
                self._skip_newlines()
                if not self._match(TokenKind.COMMA):
                    break
        self._skip_newlines()

        self._consume(TokenKind.RIGHT_BRACKET, "Expected ']' after array elements")
        return ArrayLiteral(elements=elements, line=opening.line, column=opening.column,
                            start=opening.start, end=self._previous().end)

    @staticmethod
    def _number_value(text: str):
        if text[:2] in ("0x", "0X"):
            return int(text, 16)
        if "." in text:
            return float(text)
        return int(text)

    @staticmethod
    def _literal(value, token: Token) -> Literal:
        return Literal(value=value, raw=token.text, line=token.line, column=token.column,
                       start=token.start, end=token.end)

    @staticmethod
    def _identifier(token: Token) -> Identifier:
        return Identifier(name=token.text, line=token.line, column=token.column,
                          start=token.start, end=token.end)

    # Token helpers

    def _skip_newlines(self) -> None:
        while self._check(TokenKind.NEWLINE):
            self._advance()

    def _match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self._check(kind):
                self._advance()
                return True
        return False

    def _check(self, kind: TokenKind) -> bool:
        if self._is_at_end():
            return False
        return self._peek().kind == kind

    def _check_next(self, kind: TokenKind) -> bool:
        if self.current + 1 >= len(self.tokens):
            return False
        return self.tokens[self.current + 1].kind == kind

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().kind == TokenKind.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _consume(self, kind: TokenKind, message: str) -> Token:
        if self._check(kind):
            return self._advance()

        token = self._peek()
        text = token.text.replace("\n", "\\n")
        error = self._error(f"{message}. Got '{text}' at line {token.line}, column {token.column}")
        self._record(error)
        error.recorded = True
        raise error

    def _error(self, message: str) -> ParseError:
        token = self._peek()
        return ParseError(message, token.line, token.column, token.start)

    def _record(self, error: ParseError) -> None:
        self.errors.append(Diagnostic(error.message, error.line, error.column,
                                      error.offset, DiagnosticKind.SYNTAX))

    def _synchronize(self, statement_start: int) -> None:
        """
        Skip to the next top-level boundary.

        Boundaries: just after a ';', or, once every '(' and '[' opened by the
        failed statement is closed again, before a declaration keyword or
        before an identifier that starts a fresh line at column 1.
        """
        depth = sum(_nesting(t) for t in self.tokens[statement_start:self.current])
        if self.current == statement_start:
            depth += _nesting(self._advance())

        while not self._is_at_end():
            previous = self._previous()
            if previous.kind == TokenKind.SEMICOLON:
                return
            token = self._peek()
            if depth <= 0:
                if token.kind in DECLARATION_KEYWORDS:
                    return
                if (previous.kind == TokenKind.NEWLINE and token.column == 1
                        and token.kind == TokenKind.IDENTIFIER):
                    return
            depth += _nesting(self._advance())


def _nesting(token: Token) -> int:
    if token.kind in (TokenKind.LEFT_PAREN, TokenKind.LEFT_BRACKET):
        return 1
    if token.kind in (TokenKind.RIGHT_PAREN, TokenKind.RIGHT_BRACKET):
        return -1
    return 0


def parse_tokens(tokens: List[Token]) -> Tuple[Program, List[Diagnostic]]:
    """Parse a token stream with a fresh parser."""
    return Parser(tokens).parse()
