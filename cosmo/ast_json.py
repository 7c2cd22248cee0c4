"""JSON serialization/deserialization for Cosmo AST.

This module converts between Cosmo AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. A whole program is
stored as `{"type": "Program", "body": [...]}`; tokens keep their kind,
lexeme, literal and line so runtime errors still point at the right line
after a round-trip.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Assign, Binary, Block, Call, Create, Expression, Function, Grouping,
    If, Literal, Logical, Output, Return, Unary, Variable, While,
)
from .tokens import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"__type__": "Token", "kind": t.kind.name, "lexeme": t.lexeme, "literal": t.literal, "line": t.line}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["kind"]], o["lexeme"], o.get("literal"), o["line"])


def ast_to_obj(node: Any) -> Any:
    # A program is a plain list of statements
    if isinstance(node, (list, tuple)):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node]}
    if node is None:
        return None
    if isinstance(node, Token):
        return token_to_obj(node)

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "paren": token_to_obj(node.paren),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }

    # Statements
    if isinstance(node, Expression):
        return {"type": "Expression", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Output):
        return {"type": "Output", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Create):
        return {"type": "Create", "name": token_to_obj(node.name), "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Function):
        return {
            "type": "Function",
            "name": token_to_obj(node.name),
            "params": [token_to_obj(p) for p in node.params],
            "body": [ast_to_obj(s) for s in node.body],
        }
    if isinstance(node, Return):
        return {"type": "Return", "keyword": token_to_obj(node.keyword), "value": ast_to_obj(node.value)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    if obj.get("__type__") == "Token":
        return token_from_obj(obj)
    t = obj.get("type")
    if t == "Program":
        return [ast_from_obj(n) for n in obj["body"]]

    if t == "Literal":
        return Literal(obj.get("value"))
    if t == "Grouping":
        return Grouping(ast_from_obj(obj["expression"]))
    if t == "Unary":
        return Unary(token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Binary":
        return Binary(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Logical":
        return Logical(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Variable":
        return Variable(token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(token_from_obj(obj["name"]), ast_from_obj(obj["value"]))
    if t == "Call":
        return Call(
            ast_from_obj(obj["callee"]),
            token_from_obj(obj["paren"]),
            tuple(ast_from_obj(a) for a in obj["arguments"]),
        )

    if t == "Expression":
        return Expression(ast_from_obj(obj["expression"]))
    if t == "Output":
        return Output(ast_from_obj(obj["expression"]))
    if t == "Create":
        return Create(token_from_obj(obj["name"]), ast_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block(tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "If":
        return If(
            ast_from_obj(obj["condition"]),
            ast_from_obj(obj["then_branch"]),
            ast_from_obj(obj.get("else_branch")),
        )
    if t == "While":
        return While(ast_from_obj(obj["condition"]), ast_from_obj(obj["body"]))
    if t == "Function":
        return Function(
            token_from_obj(obj["name"]),
            tuple(token_from_obj(p) for p in obj["params"]),
            tuple(ast_from_obj(s) for s in obj["body"]),
        )
    if t == "Return":
        return Return(token_from_obj(obj["keyword"]), ast_from_obj(obj.get("value")))

    raise ValueError(f"Unknown AST node type: {t}")
