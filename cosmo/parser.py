"""Recursive-descent parser for the Cosmo language.

Grammar, from the lowest to the highest binding strength:

    program     -> declaration* EOF
    declaration -> varDecl | funcDecl | statement
    statement   -> forStmt | ifStmt | whileStmt | outputStmt
                 | returnStmt | block | exprStmt
    expression  -> assignment
    assignment  -> logicOr ( "=" assignment )?
    logicOr     -> logicAnd ( "or" logicAnd )*
    logicAnd    -> equality ( "and" equality )*
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "+" | "-" ) factor )*
    factor      -> unary ( ( "*" | "/" ) unary )*
    unary       -> ( "!" | "-" ) unary | call
    call        -> primary ( "(" arguments? ")" )*
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | IDENTIFIER | "(" expression ")"

Grammar violations raise `ParseError` at the point of detection. The
declaration level turns that into a diagnostic plus a "skip" result (None)
and resynchronizes on the next statement boundary, so one pass reports
every independent error and keeps every well-formed declaration.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Assign, Binary, Block, Call, Create, Expr, Expression, Function, Grouping,
    If, Literal, Logical, Output, Return, Stmt, Unary, Variable, While,
)
from .errors import Diagnostics, ParseError
from .recursion import recursion_limit
from .tokens import Token, TokenType

MAX_ARGUMENTS = 255

# Tokens that begin a new declaration or statement.
STATEMENT_STARTS = {
    TokenType.FUNC,
    TokenType.CREATE,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.OUTPUT,
    TokenType.RETURN,
}


def desugar_for(initializer: Optional[Stmt], condition: Optional[Expr],
                increment: Optional[Expr], body: Stmt) -> Stmt:
    """Rewrite a for loop as `{ init; while (cond) { body; incr; } }`."""
    if increment is not None:
        body = Block((body, Expression(increment)))
    if condition is None:
        condition = Literal(True)
    loop: Stmt = While(condition, body)
    if initializer is not None:
        loop = Block((initializer, loop))
    return loop


class Parser:
    def __init__(self, tokens: List[Token], diagnostics: Optional[Diagnostics] = None):
        self.tokens = tokens
        self.current = 0
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics.to_stderr()

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        with recursion_limit():
            while not self.is_at_end():
                stmt = self.declaration()
                if stmt is not None:
                    statements.append(stmt)
        return statements

    # Declarations and statements

    def declaration(self) -> Optional[Stmt]:
        """Parse one declaration, or return None after recovering from an error."""
        try:
            if self.match(TokenType.CREATE):
                return self.parse_var_decl()
            if self.match(TokenType.FUNC):
                return self.parse_function()
            return self.parse_statement()
        except ParseError:
            self.synchronize()
            return None
        except RecursionError:
            self.diagnostics.error_at(self.peek(), "Too much nesting.")
            self.synchronize()
            return None

    def parse_var_decl(self) -> Create:
        name = self.consume(TokenType.IDENTIFIER, 'Expect variable name.')
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            initializer = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Create(name, initializer)

    def parse_function(self) -> Function:
        name = self.consume(TokenType.IDENTIFIER, 'Expect function name.')
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after function name.")
        params: List[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, 'Expect parameter name.'))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(TokenType.LEFT_BRACE, "Expect '{' before function body.")
        body = self.parse_block()
        return Function(name, tuple(params), tuple(body))

    def parse_statement(self) -> Stmt:
        if self.match(TokenType.FOR):
            return self.parse_for_stmt()
        if self.match(TokenType.IF):
            return self.parse_if_stmt()
        if self.match(TokenType.WHILE):
            return self.parse_while_stmt()
        if self.match(TokenType.OUTPUT):
            return self.parse_output_stmt()
        if self.match(TokenType.RETURN):
            return self.parse_return_stmt()
        if self.match(TokenType.LEFT_BRACE):
            return Block(tuple(self.parse_block()))
        return self.parse_expression_stmt()

    def parse_for_stmt(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")
        initializer: Optional[Stmt]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.CREATE):
            initializer = self.parse_var_decl()
        else:
            initializer = self.parse_expression_stmt()

        condition: Optional[Expr] = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment: Optional[Expr] = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        return desugar_for(initializer, condition, increment, self.parse_statement())

    def parse_if_stmt(self) -> If:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.parse_statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.parse_statement()
        return If(condition, then_branch, else_branch)

    def parse_while_stmt(self) -> While:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.parse_expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return While(condition, self.parse_statement())

    def parse_output_stmt(self) -> Output:
        value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Output(value)

    def parse_return_stmt(self) -> Return:
        keyword = self.previous()
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return Return(keyword, value)

    def parse_block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def parse_expression_stmt(self) -> Expression:
        expr = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        expr = self.parse_or()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise self.error(equals, 'Invalid assignment target.')
        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            expr = Logical(expr, operator, self.parse_and())
        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            expr = Logical(expr, operator, self.parse_equality())
        return expr

    def parse_equality(self) -> Expr:
        expr = self.parse_comparison()
        while self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self.previous()
            expr = Binary(expr, operator, self.parse_comparison())
        return expr

    def parse_comparison(self) -> Expr:
        expr = self.parse_term()
        while self.match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                         TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self.previous()
            expr = Binary(expr, operator, self.parse_term())
        return expr

    def parse_term(self) -> Expr:
        expr = self.parse_factor()
        while self.match(TokenType.MINUS, TokenType.PLUS):
            operator = self.previous()
            expr = Binary(expr, operator, self.parse_factor())
        return expr

    def parse_factor(self) -> Expr:
        expr = self.parse_unary()
        while self.match(TokenType.SLASH, TokenType.STAR):
            operator = self.previous()
            expr = Binary(expr, operator, self.parse_unary())
        return expr

    def parse_unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            return Unary(operator, self.parse_unary())
        return self.parse_call()

    def parse_call(self) -> Expr:
        expr = self.parse_primary()
        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: List[Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self.parse_expression())
                if not self.match(TokenType.COMMA):
                    break
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, tuple(arguments))

    def parse_primary(self) -> Expr:
        if self.match(TokenType.FALSE, TokenType.TRUE, TokenType.NIL,
                      TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), 'Expect expression.')

    # Token stream primitives

    def match(self, *kinds: TokenType) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenType, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, kind: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind == kind

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().kind == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def error(self, token: Token, message: str) -> ParseError:
        """Report a syntax error and return the exception for the caller to raise."""
        self.diagnostics.error_at(token, message)
        return ParseError(token, message)

    def synchronize(self) -> None:
        self.advance()
        while not self.is_at_end():
            if self.previous().kind == TokenType.SEMICOLON:
                return
            if self.peek().kind in STATEMENT_STARTS:
                return
            self.advance()


def parse(tokens: List[Token], diagnostics: Optional[Diagnostics] = None) -> List[Stmt]:
    """Parse a token list into the program's top-level statements."""
    return Parser(tokens, diagnostics).parse()
