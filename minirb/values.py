"""Runtime values of the minirb interpreter.

Values are ordinary Python objects: numbers are floats, strings are
`str`, booleans are `bool` and nil is `None`. User-defined functions are
wrapped in `FunctionValue`; native callables are `BuiltinFunction`
instances. This module also holds the helpers that render values for
display and name their types in error messages.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Optional

from .ast import FunctionDefinition
from .builtin_function import BuiltinFunction
from .environment import Environment


class FunctionValue:
    """A user-defined function.

    `node` is the definition the function was created from. `env` is the
    environment active at the definition site; it is only consulted when
    the interpreter runs with lexical scoping enabled.
    """
    def __init__(self, node: FunctionDefinition, env: Optional[Environment] = None):
        self.node = node
        self.env = env

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def params(self):
        return self.node.params

    @property
    def body(self):
        return self.node.body

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, FunctionValue) and other.node is self.node

    def __hash__(self) -> int:
        return id(self.node)

    def __repr__(self) -> str:
        return f"<function {self.name}>"


def is_number(value: Any) -> bool:
    # bool is a subclass of int but is not a number here
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float))


def format_number(value: float) -> str:
    """Render a number in plain decimal notation.

    Integral values print without a fractional part (`7`, not `7.0`);
    other finite values use the shortest repr that round-trips.
    """
    value = float(value)
    if math.isnan(value):
        return 'nan'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return '-0'
        # shortest round-trip digits, not the exact binary value
        text = format(Decimal(repr(value)), 'f')
        if '.' in text:
            text = text.rstrip('0').rstrip('.')
        return text
    text = repr(value)
    if 'e' in text:
        # repr switches to exponent form for very small magnitudes
        text = format(Decimal(text), 'f')
    return text


def to_string(value: Any) -> str:
    """Convert a runtime value to the text `puts` prints for it."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, FunctionValue):
        return '<function>'
    if isinstance(value, BuiltinFunction):
        return '<builtin-function>'
    return str(value)


def type_name(value: Any) -> str:
    """Return the language-level type name of a runtime value."""
    if value is None:
        return 'Null'
    if isinstance(value, bool):
        return 'Boolean'
    if is_number(value):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, FunctionValue):
        return 'Function'
    if isinstance(value, BuiltinFunction):
        return 'BuiltinFunction'
    return type(value).__name__
