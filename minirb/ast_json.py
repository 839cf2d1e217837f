"""JSON serialization/deserialization for minirb ASTs.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Each node becomes a dict tagged
with its class name under `"type"`; a list of statements becomes a list
of such dicts.
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from .ast import (
    Node,
    NumberLiteral,
    Identifier,
    BinaryExpression,
    Assignment,
    FunctionDefinition,
    CallExpression,
)


def ast_to_obj(node: Union[Node, List[Node]]) -> Any:
    if isinstance(node, (list, tuple)):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, NumberLiteral):
        return {"type": "NumberLiteral", "text": node.text}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, BinaryExpression):
        return {
            "type": "BinaryExpression",
            "operator": node.operator,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Assignment):
        return {"type": "Assignment", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, FunctionDefinition):
        return {
            "type": "FunctionDefinition",
            "name": node.name,
            "params": [p.name for p in node.params],
            "body": [ast_to_obj(n) for n in node.body],
        }
    if isinstance(node, CallExpression):
        return {
            "type": "CallExpression",
            "callee": ast_to_obj(node.callee),
            "args": [ast_to_obj(a) for a in node.args],
        }
    raise TypeError(f"Unsupported AST node for serialization: {type(node)}")


def ast_from_obj(obj: Any) -> Any:
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError(f"expected an AST object, got {type(obj).__name__}")
    t = obj.get("type")
    if t == "NumberLiteral":
        return NumberLiteral(obj["text"])
    if t == "Identifier":
        return Identifier(obj["name"])
    if t == "BinaryExpression":
        return BinaryExpression(obj["operator"], ast_from_obj(obj["left"]), ast_from_obj(obj["right"]))
    if t == "Assignment":
        return Assignment(obj["name"], ast_from_obj(obj["value"]))
    if t == "FunctionDefinition":
        params = tuple(Identifier(name) for name in obj.get("params", []))
        body = tuple(ast_from_obj(n) for n in obj.get("body", []))
        return FunctionDefinition(obj["name"], params, body)
    if t == "CallExpression":
        args = tuple(ast_from_obj(a) for a in obj.get("args", []))
        return CallExpression(ast_from_obj(obj["callee"]), args)
    raise ValueError(f"Unknown AST node type: {t}")


def dump_ast(node: Node, depth: int = 0) -> str:
    """Render a node as an indented outline, one construct per line."""
    pad = '  ' * depth
    if isinstance(node, NumberLiteral):
        return f"{pad}Number: {node.text}"
    if isinstance(node, Identifier):
        return f"{pad}Identifier: {node.name}"
    if isinstance(node, BinaryExpression):
        lines = [f"{pad}BinaryExpression: {node.operator}",
                 dump_ast(node.left, depth + 1), dump_ast(node.right, depth + 1)]
        return '\n'.join(lines)
    if isinstance(node, Assignment):
        return '\n'.join([f"{pad}Assign: {node.name}", dump_ast(node.value, depth + 1)])
    if isinstance(node, FunctionDefinition):
        lines = [f"{pad}Function: {node.name}", f"{pad}  Parameters:"]
        lines.extend(dump_ast(p, depth + 2) for p in node.params)
        lines.append(f"{pad}  Body:")
        lines.extend(dump_ast(stmt, depth + 2) for stmt in node.body)
        return '\n'.join(lines)
    if isinstance(node, CallExpression):
        lines = [f"{pad}Call:", dump_ast(node.callee, depth + 1), f"{pad}  Arguments:"]
        lines.extend(dump_ast(arg, depth + 2) for arg in node.args)
        return '\n'.join(lines)
    raise TypeError(f"Unsupported AST node: {type(node)}")
