"""Tokenizer for minirb.

Scanning is delegated to a Lark `basic` lexer built from the terminal
definitions in `TOKEN_GRAMMAR`; this module wraps the resulting lazy
token stream in a pull interface (`Lexer.next_token`) with the
end-of-input behaviour the parser relies on:

* whitespace (space, tab, newline) is skipped;
* identifiers spelling a reserved word come out as `KEYWORD`;
* an unrecognized character raises `LexerError` once every token before
  it has been handed out;
* after the input is exhausted every call returns an `EOF` token.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexerError


class TokenKind(Enum):
    NUMBER = 'Number'
    IDENTIFIER = 'Identifier'
    OPERATOR = 'Operator'
    ASSIGN = 'Assign'
    LPAREN = 'LParen'
    RPAREN = 'RParen'
    KEYWORD = 'Keyword'
    EOF = 'EOF'


KEYWORDS = frozenset({'def', 'end', 'if', 'while'})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    position: int = 0

    @property
    def end(self) -> int:
        return self.position + len(self.lexeme)

    def is_keyword(self, word: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.lexeme == word

    def is_operator(self, symbol: str) -> bool:
        return self.kind is TokenKind.OPERATOR and self.lexeme == symbol


# The start rule only exists so Lark keeps every terminal; parsing is
# done by minirb.parser, never by Lark.
TOKEN_GRAMMAR = r"""
    start: _token*
    _token: NUMBER | IDENTIFIER | OPERATOR | ASSIGN | LPAREN | RPAREN

    NUMBER: /[0-9]+/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    OPERATOR: /[+\-*\/,;]/
    ASSIGN: "="
    LPAREN: "("
    RPAREN: ")"

    WHITESPACE: /[ \t\n]+/
    %ignore WHITESPACE
"""


TOKEN_LEXER = Lark(
    TOKEN_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


_KIND_BY_TERMINAL = {
    'NUMBER': TokenKind.NUMBER,
    'IDENTIFIER': TokenKind.IDENTIFIER,
    'OPERATOR': TokenKind.OPERATOR,
    'ASSIGN': TokenKind.ASSIGN,
    'LPAREN': TokenKind.LPAREN,
    'RPAREN': TokenKind.RPAREN,
}


class Lexer:
    """Produces minirb tokens one at a time from a source string."""

    def __init__(self, source: str, start: int = 0):
        self.source = source
        self.start = start
        self._stream = TOKEN_LEXER.lex(source[start:])
        self._finished = False
        self._error: Optional[LexerError] = None

    def next_token(self) -> Token:
        if self._error is not None:
            raise self._error
        if self._finished:
            return self._eof()
        try:
            raw = next(self._stream)
        except StopIteration:
            self._finished = True
            return self._eof()
        except UnexpectedCharacters as e:
            self._error = LexerError(e.char, self.start + e.pos_in_stream)
            raise self._error from e
        kind = _KIND_BY_TERMINAL[raw.type]
        lexeme = str(raw)
        if kind is TokenKind.IDENTIFIER and lexeme in KEYWORDS:
            kind = TokenKind.KEYWORD
        return Token(kind, lexeme, self.start + raw.start_pos)

    def _eof(self) -> Token:
        return Token(TokenKind.EOF, '', len(self.source))

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return


def next_token(source: str, cursor: int = 0) -> Token:
    """Return the first token at or after offset `cursor` in `source`.

    Use `Token.end` as the cursor for the following call.
    """
    return Lexer(source, cursor).next_token()


def tokenize(source: str) -> Iterator[Token]:
    """Lazily yield every token of `source`, finishing with a single EOF."""
    return iter(Lexer(source))
