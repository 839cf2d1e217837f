"""Abstract Syntax Tree (AST) definitions for minirb.

Each class below is one syntactic form produced by the parser. Nodes are
frozen dataclasses whose child sequences are tuples, so a tree cannot be
modified once it is built and every child belongs to exactly one parent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class NumberLiteral(Node):
    text: str  # raw numeral, converted to float by the interpreter


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class BinaryExpression(Node):
    operator: str
    left: Node
    right: Node


@dataclass(frozen=True)
class Assignment(Node):
    name: str
    value: Node


@dataclass(frozen=True)
class FunctionDefinition(Node):
    name: str
    params: Tuple[Identifier, ...]
    body: Tuple[Node, ...]


@dataclass(frozen=True)
class CallExpression(Node):
    callee: Node
    args: Tuple[Node, ...]
