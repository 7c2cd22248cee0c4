"""Grammar-driven front end for the Cosmo language.

The source is fed into a Lark LALR parser configured with the Cosmo
grammar, and the resulting parse tree is transformed into the same AST
the recursive-descent parser in `cosmo.parser` builds: identical node
classes, identical tokens and line numbers, identical `for` desugaring.
There is no error recovery here; the first syntax error raises
`CosmoSyntaxError`.
"""

from __future__ import annotations

from typing import Any, List

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedEOF, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Assign, Binary, Block, Call, Create, Expression, Function, Grouping,
    If, Literal, Logical, Output, Return, Stmt, Unary, Variable, While,
)
from .errors import CosmoSyntaxError, Diagnostic
from .parser import desugar_for
from .recursion import recursion_limit
from .tokens import Token, TokenType


COSMO_GRAMMAR = r"""
    start: declaration*

    ?declaration: var_decl
                | func_decl
                | statement

    var_decl: "create" IDENTIFIER ["=" expression] ";"
    func_decl: "func" IDENTIFIER "(" [params] ")" "{" declaration* "}"
    params: IDENTIFIER ("," IDENTIFIER)*

    ?statement: for_stmt
              | if_stmt
              | while_stmt
              | output_stmt
              | return_stmt
              | block
              | expr_stmt

    for_stmt: "for" "(" for_init [expression] ";" [expression] ")" statement
    for_init: var_decl
            | expr_stmt
            | ";"
    if_stmt: "if" "(" expression ")" statement ["else" statement]
    while_stmt: "while" "(" expression ")" statement
    output_stmt: "output" expression ";"
    return_stmt: "return" [expression] ";"
    block: "{" declaration* "}"
    expr_stmt: expression ";"

    // Expressions with precedence
    ?expression: assignment
    ?assignment: IDENTIFIER "=" assignment -> assign
               | logic_or
    ?logic_or: logic_and
             | logic_or OR logic_and -> logical
    ?logic_and: equality
              | logic_and AND equality -> logical
    ?equality: comparison
             | equality (BANG_EQUAL | EQUAL_EQUAL) comparison -> binary
    ?comparison: term
               | comparison (GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) term -> binary
    ?term: factor
         | term (PLUS | MINUS) factor -> binary
    ?factor: unary
           | factor (STAR | SLASH) unary -> binary
    ?unary: (BANG | MINUS) unary -> unary_op
          | call
    ?call: primary
         | call "(" [arguments] ")" -> call_expr
    arguments: expression ("," expression)*
    ?primary: NUMBER -> number
            | STRING -> string
            | "true" -> true
            | "false" -> false
            | "nil" -> nil
            | IDENTIFIER -> variable
            | "(" expression ")" -> grouping

    // Tokens
    OR: "or"
    AND: "and"
    BANG_EQUAL: "!="
    EQUAL_EQUAL: "=="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    BANG: "!"
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    // Comments
    LINE_COMMENT: /\/\/[^\n]*/
    %ignore LINE_COMMENT

    %import common.WS
    %ignore WS
"""


COSMO_PARSER = Lark(
    COSMO_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=True,
)


def convert_token(tok: Any) -> Token:
    """Convert a Lark token whose terminal name matches a TokenType member."""
    return Token(TokenType[tok.type], str(tok), None, tok.line)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into a Cosmo AST."""

    def start(self, items):
        return list(items)

    # Declarations and statements
    def var_decl(self, items):
        name, initializer = items
        return Create(convert_token(name), initializer)

    def params(self, items):
        return [convert_token(tok) for tok in items]

    def func_decl(self, items):
        name, params = items[0], items[1]
        body = items[2:]
        return Function(convert_token(name), tuple(params or ()), tuple(body))

    def for_stmt(self, items):
        initializer, condition, increment, body = items
        return desugar_for(initializer, condition, increment, body)

    def for_init(self, items):
        # A bare ";" leaves no children
        return items[0] if items else None

    def if_stmt(self, items):
        condition, then_branch, else_branch = items
        return If(condition, then_branch, else_branch)

    def while_stmt(self, items):
        condition, body = items
        return While(condition, body)

    def output_stmt(self, items):
        return Output(items[0])

    @v_args(meta=True)
    def return_stmt(self, meta, items):
        keyword = Token(TokenType.RETURN, 'return', None, meta.line)
        return Return(keyword, items[0])

    def block(self, items):
        return Block(tuple(items))

    def expr_stmt(self, items):
        return Expression(items[0])

    # Expressions
    def assign(self, items):
        name, value = items
        return Assign(convert_token(name), value)

    def logical(self, items):
        left, op, right = items
        return Logical(left, convert_token(op), right)

    def binary(self, items):
        left, op, right = items
        return Binary(left, convert_token(op), right)

    def unary_op(self, items):
        op, right = items
        return Unary(convert_token(op), right)

    @v_args(meta=True)
    def call_expr(self, meta, items):
        callee, arguments = items
        paren = Token(TokenType.RIGHT_PAREN, ')', None, meta.end_line)
        return Call(callee, paren, tuple(arguments or ()))

    def arguments(self, items):
        return list(items)

    def number(self, items):
        return Literal(float(items[0]))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def true(self, items):
        return Literal(True)

    def false(self, items):
        return Literal(False)

    def nil(self, items):
        return Literal(None)

    def variable(self, items):
        return Variable(convert_token(items[0]))

    def grouping(self, items):
        return Grouping(items[0])


NESTING_DIAGNOSTIC = Diagnostic(-1, '', 'Too much nesting.')


def syntax_diagnostic(error: UnexpectedInput) -> Diagnostic:
    line = getattr(error, 'line', -1)
    if isinstance(error, UnexpectedEOF) or (
        isinstance(error, UnexpectedToken) and error.token.type == '$END'
    ):
        return Diagnostic(line, ' at end', 'Unexpected end of input.')
    if isinstance(error, UnexpectedToken):
        return Diagnostic(line, f" at '{error.token}'", 'Unexpected token.')
    return Diagnostic(line, '', 'Unexpected character.')


def parse_with_grammar(source: str) -> List[Stmt]:
    """Parse Cosmo source text into top-level statements using the Lark grammar."""
    with recursion_limit():
        try:
            tree = COSMO_PARSER.parse(source)
        except UnexpectedInput as e:
            raise CosmoSyntaxError([syntax_diagnostic(e)]) from e
        try:
            return ASTTransformer().transform(tree)
        except RecursionError:
            raise CosmoSyntaxError([NESTING_DIAGNOSTIC]) from None
        except VisitError as e:
            # callbacks that overflow the stack arrive wrapped by lark
            if isinstance(e.orig_exc, RecursionError):
                raise CosmoSyntaxError([NESTING_DIAGNOSTIC]) from None
            raise
