"""Recursive-descent parser for minirb.

The parser pulls tokens from a `Lexer` one at a time and keeps a single
token of lookahead; it never backtracks. Grammar::

    statement   := "def" function | identifier "=" expression | expression
    function    := identifier ["(" [identifier {"," identifier}] ")"]
                   {statement [";"]} "end"
    expression  := term {operator term}
    term        := number | call | identifier | "(" expression ")"
    call        := identifier "(" [expression {"," expression}] ")"

The four arithmetic operators share a single precedence level and
associate to the left, so `2 + 3 * 4` parses as `(2 + 3) * 4`.

`parse_statement` returns one AST node per call. Any failure raises
`ParseError` and abandons the statement; resuming an unfinished
`def ... end` block is left to the caller.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Node, NumberLiteral, Identifier, BinaryExpression, Assignment,
    FunctionDefinition, CallExpression,
)
from .errors import LexerError, ParseError, ParseErrorKind
from .lexer import Lexer, Token, TokenKind

BINARY_OPERATORS = ('+', '-', '*', '/')


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.current: Token = self._pull()

    def _pull(self) -> Token:
        try:
            return self.lexer.next_token()
        except LexerError as e:
            raise ParseError(ParseErrorKind.UNEXPECTED_TOKEN, str(e)) from e

    def advance(self) -> Token:
        token = self.current
        self.current = self._pull()
        return token

    def at_end(self) -> bool:
        return self.current.kind is TokenKind.EOF

    def unexpected(self, expected: str) -> ParseError:
        token = self.current
        found = 'end of input' if token.kind is TokenKind.EOF else f"{token.kind.value} {token.lexeme!r}"
        return ParseError(
            ParseErrorKind.UNEXPECTED_TOKEN,
            f"expected {expected} at offset {token.position}, got {found}",
        )

    def expect_closing_paren(self) -> None:
        if self.current.kind is not TokenKind.RPAREN:
            raise ParseError(
                ParseErrorKind.EXPECTED_CLOSING_PAREN,
                f"expected ')' at offset {self.current.position}",
            )
        self.advance()

    def skip_separators(self) -> None:
        while self.current.is_operator(';'):
            self.advance()

    def parse_program(self) -> List[Node]:
        statements: List[Node] = []
        self.skip_separators()
        while not self.at_end():
            statements.append(self.parse_statement())
            self.skip_separators()
        return statements

    def parse_statement(self) -> Node:
        token = self.current
        if token.is_keyword('def'):
            self.advance()
            return self.parse_function()
        if token.kind is TokenKind.IDENTIFIER:
            self.advance()
            if self.current.kind is TokenKind.ASSIGN:
                self.advance()
                value = self.parse_expression()
                return Assignment(token.lexeme, value)
            # Not an assignment: the identifier starts an ordinary expression
            left = self.parse_identifier_term(token)
            return self.parse_binary_tail(left)
        return self.parse_expression()

    def parse_function(self) -> FunctionDefinition:
        name_token = self.current
        if name_token.kind is not TokenKind.IDENTIFIER:
            raise ParseError(
                ParseErrorKind.EXPECTED_FUNCTION_NAME,
                f"expected function name after 'def' at offset {name_token.position}",
            )
        self.advance()
        params: List[Identifier] = []
        if self.current.kind is TokenKind.LPAREN:
            self.advance()
            while self.current.kind is TokenKind.IDENTIFIER:
                params.append(Identifier(self.advance().lexeme))
                if self.current.is_operator(','):
                    self.advance()
                else:
                    break
            self.expect_closing_paren()
        body: List[Node] = []
        while not self.current.is_keyword('end'):
            if self.at_end():
                raise self.unexpected("'end'")
            body.append(self.parse_statement())
            if self.current.is_operator(';'):
                self.advance()
        self.advance()  # 'end'
        return FunctionDefinition(name_token.lexeme, tuple(params), tuple(body))

    def parse_expression(self) -> Node:
        return self.parse_binary_tail(self.parse_term())

    def parse_binary_tail(self, left: Node) -> Node:
        while self.current.kind is TokenKind.OPERATOR and self.current.lexeme in BINARY_OPERATORS:
            operator = self.advance().lexeme
            right = self.parse_term()
            left = BinaryExpression(operator, left, right)
        return left

    def parse_term(self) -> Node:
        token = self.current
        if token.kind is TokenKind.NUMBER:
            self.advance()
            return NumberLiteral(token.lexeme)
        if token.kind is TokenKind.IDENTIFIER:
            self.advance()
            return self.parse_identifier_term(token)
        if token.kind is TokenKind.LPAREN:
            self.advance()
            inner = self.parse_expression()
            self.expect_closing_paren()
            return inner
        raise self.unexpected('a number, identifier or "("')

    def parse_identifier_term(self, token: Token) -> Node:
        """Finish a term whose identifier `token` was already consumed."""
        name = Identifier(token.lexeme)
        if self.current.kind is not TokenKind.LPAREN:
            return name
        self.advance()
        args: List[Node] = []
        if self.current.kind is not TokenKind.RPAREN:
            args.append(self.parse_expression())
            while self.current.is_operator(','):
                self.advance()
                args.append(self.parse_expression())
        self.expect_closing_paren()
        return CallExpression(name, tuple(args))


def parse_statement(source: str) -> Node:
    """Parse the first statement of `source`."""
    return Parser(Lexer(source)).parse_statement()


def parse_program(source: str) -> List[Node]:
    """Parse every statement in `source`."""
    return Parser(Lexer(source)).parse_program()
