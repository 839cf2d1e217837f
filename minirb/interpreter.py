"""Tree-walking interpreter for minirb.

`Interpreter.evaluate` walks one AST node against an `Environment` and
returns the resulting runtime value, raising `EvalError` for anything
the language rejects. Top-level statements share the interpreter's
global environment, so definitions persist from one statement (or one
REPL line) to the next.

Free variables inside a function body resolve through the *caller's*
environment by default (dynamic scoping). Passing
`lexical_scoping=True` chains each call frame to the environment the
function was defined in instead.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from .ast import (
    Node, NumberLiteral, Identifier, BinaryExpression, Assignment,
    FunctionDefinition, CallExpression,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import EvalError, EvalErrorKind
from .parser import parse_program
from .std.io import BasicIO, populate_io_environment
from .values import FunctionValue, is_number, to_string, type_name


class Interpreter:
    """Core interpreter that evaluates minirb ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 lexical_scoping: bool = False, io: Optional[BasicIO] = None):
        self.global_env = Environment()
        self.lexical_scoping = lexical_scoping
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.io = io if io is not None else BasicIO()
        populate_io_environment(self.global_env, self.io)

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def register_builtin(self, name: str, fn: Callable[[List[Any]], Any],
                         arity: Optional[int] = None) -> BuiltinFunction:
        """Expose a native callable to programs under `name`.

        `fn` receives the evaluated arguments as a list. Any exception it
        raises reaches the program as a FunctionCallError.
        """
        builtin = BuiltinFunction(name, fn, arity)
        self.global_env.set(name, builtin)
        return builtin

    # Public API
    def run(self, statements: List[Node], env: Optional[Environment] = None) -> Any:
        """Evaluate statements in order and return the last value."""
        if env is None:
            env = self.global_env
        result = None
        for stmt in statements:
            result = self.evaluate(stmt, env)
            if self.debug_level >= 1:
                self.debug(f"statement {type(stmt).__name__} => {to_string(result)}")
        return result

    def run_source(self, source: str) -> Any:
        return self.run(parse_program(source))

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, NumberLiteral):
            try:
                return float(node.text)
            except ValueError:
                raise EvalError(EvalErrorKind.TYPE_MISMATCH, f'invalid number literal {node.text!r}')
        if isinstance(node, Identifier):
            return env.get(node.name)
        if isinstance(node, BinaryExpression):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Assignment):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {to_string(value)} (depth {env.depth})")
            return value
        if isinstance(node, FunctionDefinition):
            func_value = FunctionValue(node, env)
            env.set(node.name, func_value)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(p.name for p in node.params)})")
            return func_value
        if isinstance(node, CallExpression):
            # Arguments are evaluated in the caller's scope before the callee is resolved
            args = [self.evaluate(arg, env) for arg in node.args]
            func = self.resolve_callee(node.callee, env)
            if self.debug_level >= 3:
                self.debug(f"call {func!r} with ({', '.join(to_string(a) for a in args)})")
            result = self.call_function(func, args, env)
            if self.debug_level >= 3:
                self.debug(f"return from {func!r} => {to_string(result)}")
            return result
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def resolve_callee(self, callee: Node, env: Environment) -> Any:
        if not isinstance(callee, Identifier):
            raise EvalError(EvalErrorKind.NOT_A_FUNCTION, f'{type(callee).__name__} is not callable')
        if callee.name not in env:
            raise EvalError(EvalErrorKind.FUNCTION_NOT_FOUND, f'undefined function {callee.name}')
        return env.get(callee.name)

    def call_function(self, func: Any, args: List[Any], env: Environment) -> Any:
        if isinstance(func, FunctionValue):
            parent = func.env if self.lexical_scoping and func.env is not None else env
            call_env = Environment(parent=parent)
            # Extra arguments are dropped; missing ones leave the parameter unbound
            for param, arg in zip(func.params, args):
                call_env.set(param.name, arg)
            result = None
            for stmt in func.body:
                result = self.evaluate(stmt, call_env)
            return result
        if isinstance(func, BuiltinFunction):
            try:
                if func.arity is not None and len(args) != func.arity:
                    raise TypeError(f"{func.name} expects {func.arity} arguments, got {len(args)}")
                return func.fn(args)
            except MemoryError:
                raise
            except Exception as ex:
                raise EvalError(EvalErrorKind.FUNCTION_CALL_ERROR, f'{func.name}: {ex}') from ex
        raise EvalError(EvalErrorKind.NOT_A_FUNCTION, f'{type_name(func)} value is not callable')

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if not is_number(a) or not is_number(b):
            raise EvalError(EvalErrorKind.TYPE_MISMATCH,
                            f'unsupported {op} for {type_name(a)} and {type_name(b)}')
        if len(op) != 1:
            raise EvalError(EvalErrorKind.INVALID_OPERATOR, f'invalid operator {op!r}')
        a = float(a)
        b = float(b)
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            if b == 0.0:
                raise EvalError(EvalErrorKind.DIVISION_BY_ZERO, 'division by zero')
            return a / b
        raise EvalError(EvalErrorKind.UNSUPPORTED_OPERATOR, f'unsupported operator {op!r}')


def run_program(source: str, debug_level: int = 0, lexical_scoping: bool = False) -> Any:
    """Convenience function to parse and run a minirb program from source string."""
    with Interpreter(debug_level=debug_level, lexical_scoping=lexical_scoping) as interpreter:
        return interpreter.run_source(source)


def compile_module(file_path: str, debug_level: int = 0) -> Interpreter:
    """Run a minirb file and return the interpreter holding its definitions."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run_source(source)
    finally:
        interpreter.close()
    return interpreter
