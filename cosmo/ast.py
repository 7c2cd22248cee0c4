"""Abstract Syntax Tree (AST) definitions for the Cosmo language.

Two disjoint node families are defined here: expressions, which produce a
value, and statements, which are executed for their effect. Every node is
a frozen dataclass so a parsed tree cannot be altered after construction.
`Expr` and `Stmt` name the closed set of variants for each family; the
interpreter dispatches over exactly these classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from .tokens import Token


###############################################################################
# Expressions
###############################################################################


@dataclass(frozen=True)
class Literal:
    value: Any  # float, str, bool or None


@dataclass(frozen=True)
class Grouping:
    expression: 'Expr'


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Logical:
    left: 'Expr'
    operator: Token  # AND or OR
    right: 'Expr'


@dataclass(frozen=True)
class Variable:
    name: Token


@dataclass(frozen=True)
class Assign:
    name: Token
    value: 'Expr'


@dataclass(frozen=True)
class Call:
    callee: 'Expr'
    paren: Token  # closing parenthesis, used to locate runtime errors
    arguments: Tuple['Expr', ...]


Expr = Union[Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call]


###############################################################################
# Statements
###############################################################################


@dataclass(frozen=True)
class Expression:
    expression: Expr


@dataclass(frozen=True)
class Output:
    expression: Expr


@dataclass(frozen=True)
class Create:
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block:
    statements: Tuple['Stmt', ...]


@dataclass(frozen=True)
class If:
    condition: Expr
    then_branch: 'Stmt'
    else_branch: Optional['Stmt']


@dataclass(frozen=True)
class While:
    condition: Expr
    body: 'Stmt'


@dataclass(frozen=True)
class Function:
    name: Token
    params: Tuple[Token, ...]
    body: Tuple['Stmt', ...]


@dataclass(frozen=True)
class Return:
    keyword: Token
    value: Optional[Expr]


Stmt = Union[Expression, Output, Create, Block, If, While, Function, Return]
