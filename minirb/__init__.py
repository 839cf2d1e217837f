# minirb language package
# This package provides a tokenizer, parser and tree-walking interpreter for minirb.
from .errors import MinirbError, LexerError, ParseError, ParseErrorKind, EvalError, EvalErrorKind
from .lexer import Lexer, Token, TokenKind, tokenize, next_token
from .parser import Parser, parse_statement, parse_program
from .environment import Environment
from .interpreter import Interpreter, run_program, compile_module

__all__ = [
    'MinirbError',
    'LexerError',
    'ParseError',
    'ParseErrorKind',
    'EvalError',
    'EvalErrorKind',
    'Lexer',
    'Token',
    'TokenKind',
    'tokenize',
    'next_token',
    'Parser',
    'parse_statement',
    'parse_program',
    'Environment',
    'Interpreter',
    'run_program',
    'compile_module',
]
