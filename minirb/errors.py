from enum import Enum


class MinirbError(Exception):
    """Base class for every error raised by the minirb toolchain."""


class LexerError(MinirbError):
    """Raised when the tokenizer meets a character it does not recognize."""
    def __init__(self, char: str, position: int):
        super().__init__(f"unrecognized character {char!r} at offset {position}")
        self.char = char
        self.position = position


class ParseErrorKind(Enum):
    UNEXPECTED_TOKEN = 'UnexpectedToken'
    EXPECTED_CLOSING_PAREN = 'ExpectedClosingParen'
    EXPECTED_FUNCTION_NAME = 'ExpectedFunctionName'


class EvalErrorKind(Enum):
    TYPE_MISMATCH = 'TypeMismatch'
    DIVISION_BY_ZERO = 'DivisionByZero'
    INVALID_OPERATOR = 'InvalidOperator'
    UNSUPPORTED_OPERATOR = 'UnsupportedOperator'
    NOT_A_FUNCTION = 'NotAFunction'
    FUNCTION_NOT_FOUND = 'FunctionNotFound'
    FUNCTION_CALL_ERROR = 'FunctionCallError'


class ParseError(MinirbError):
    """Aborts the statement currently being parsed."""
    def __init__(self, kind: ParseErrorKind, message: str):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message


class EvalError(MinirbError):
    """Aborts evaluation of the current top-level statement."""
    def __init__(self, kind: EvalErrorKind, message: str):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message
