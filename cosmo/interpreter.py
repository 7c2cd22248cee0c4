"""Tree-walking interpreter for the Cosmo language.

The interpreter executes the statement list produced by the parser
against a global environment seeded with the native standard library.
It keeps one piece of mutable state besides the globals: the current
environment, which `execute_block` swaps for a child scope and always
restores, whether the block finishes normally, returns, or fails.

`return` is not implemented with an exception. Executing a statement
yields either None (normal completion) or a `ReturnSignal`; every
statement that runs nested statements hands a signal straight back to
its caller until a function call consumes it. Runtime failures are
`CosmoError` exceptions and abort the whole `interpret` call.
"""

from __future__ import annotations

from typing import IO, Any, List, Optional

from .ast import (
    Assign, Binary, Block, Call, Create, Expr, Expression, Function, Grouping,
    If, Literal, Logical, Output, Return, Stmt, Unary, Variable, While,
)
from .callable import Callable, FunctionValue
from .environment import Environment
from .errors import CosmoError, CosmoSyntaxError, Diagnostics, ReturnSignal
from .parser import Parser
from .recursion import recursion_limit
from .scanner import Scanner
from .std import populate_numeric_environment
from .tokens import Token, TokenType
from .types import is_equal, is_number, is_truthy, to_string, type_name


class Interpreter:
    """Core interpreter that executes a Cosmo program."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.globals = Environment()
        self.environment = self.globals
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp: Optional[IO[str]] = None
        self._debug_mode = 'w'
        self.load_standard_module()

    def debug(self, msg: str) -> None:
        if self.debug_level > 0:
            if self.debug_fp is None:
                self.debug_fp = open(self.debug_file, self._debug_mode, encoding='utf-8')
                # later runs on the same interpreter append to the same log
                self._debug_mode = 'a'
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close_debug(self) -> None:
        if self.debug_fp is not None:
            self.debug_fp.close()
            self.debug_fp = None

    def load_standard_module(self) -> None:
        numeric_env = populate_numeric_environment()
        for name, value in numeric_env.values.items():
            self.globals.define(name, value)

    # Public API
    def interpret(self, statements: List[Stmt]) -> None:
        """Execute top-level statements in order.

        A runtime error stops execution and propagates to the caller; no
        statement after the failing one runs.
        """
        try:
            with recursion_limit():
                for stmt in statements:
                    if self.debug_level >= 1:
                        self.debug(f"execute {type(stmt).__name__}")
                    signal = self.execute(stmt)
                    if isinstance(signal, ReturnSignal):
                        raise CosmoError('ReturnError', "Can't return from top-level code.")
        except CosmoError as ex:
            if self.debug_level >= 1:
                self.debug(f"runtime error: {ex}")
            raise
        except RecursionError:
            if self.debug_level >= 1:
                self.debug('runtime error: maximum call depth exceeded')
            raise CosmoError('RecursionError', 'Maximum call depth exceeded.') from None
        finally:
            self.close_debug()

    def execute_block(self, statements: List[Stmt], env: Environment) -> Optional[ReturnSignal]:
        previous = self.environment
        try:
            self.environment = env
            for stmt in statements:
                signal = self.execute(stmt)
                if signal is not None:
                    return signal
            return None
        finally:
            self.environment = previous

    def execute(self, stmt: Stmt) -> Optional[ReturnSignal]:
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression)
            return None
        if isinstance(stmt, Output):
            value = self.evaluate(stmt.expression)
            print(to_string(value))
            return None
        if isinstance(stmt, Create):
            value = self.evaluate(stmt.initializer) if stmt.initializer is not None else None
            self.environment.define(stmt.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"create {stmt.name.lexeme} = {to_string(value)}")
            return None
        if isinstance(stmt, Block):
            block_env = Environment(self.environment)
            if self.debug_level >= 4:
                self.debug(f"enter block at depth {block_env.depth()}")
            return self.execute_block(stmt.statements, block_env)
        if isinstance(stmt, If):
            cond = self.evaluate(stmt.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                return self.execute(stmt.then_branch)
            if stmt.else_branch is not None:
                return self.execute(stmt.else_branch)
            return None
        if isinstance(stmt, While):
            while is_truthy(self.evaluate(stmt.condition)):
                signal = self.execute(stmt.body)
                if signal is not None:
                    return signal
            return None
        if isinstance(stmt, Function):
            func_value = FunctionValue(stmt, self.environment)
            self.environment.define(stmt.name.lexeme, func_value)
            if self.debug_level >= 2:
                self.debug(f"define function {stmt.name.lexeme}/{func_value.arity()}")
            return None
        if isinstance(stmt, Return):
            value = self.evaluate(stmt.value) if stmt.value is not None else None
            return ReturnSignal(value)
        raise TypeError(f"execute: unexpected node type {type(stmt).__name__}")

    def evaluate(self, expr: Expr) -> Any:
        value = self.evaluate_node(expr)
        if self.debug_level >= 4:
            self.debug(f"eval {type(expr).__name__} -> {to_string(value)}")
        return value

    def evaluate_node(self, expr: Expr) -> Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, Unary):
            right = self.evaluate(expr.right)
            if expr.operator.kind == TokenType.MINUS:
                self.check_number_operand(expr.operator, right)
                return -right
            if expr.operator.kind == TokenType.BANG:
                return not is_truthy(right)
            raise TypeError(f"Unknown unary operator {expr.operator.lexeme}")
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self.apply_binary_op(expr.operator, left, right)
        if isinstance(expr, Logical):
            left = self.evaluate(expr.left)
            # The result is the deciding operand itself, not a coerced boolean
            if expr.operator.kind == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right)
        if isinstance(expr, Variable):
            return self.environment.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            self.environment.assign(expr.name, value)
            return value
        if isinstance(expr, Call):
            callee = self.evaluate(expr.callee)
            args = [self.evaluate(arg) for arg in expr.arguments]
            return self.call_function(callee, args, expr.paren)
        raise TypeError(f"evaluate: unexpected node type {type(expr).__name__}")

    def call_function(self, callee: Any, args: List[Any], paren: Token) -> Any:
        if not isinstance(callee, Callable):
            raise CosmoError('TypeError', f"Can only call functions, not {type_name(callee)}.", paren)
        if len(args) != callee.arity():
            raise CosmoError('ArityError', f"Expected {callee.arity()} arguments but got {len(args)}.", paren)
        if self.debug_level >= 3:
            self.debug(f"call {callee!r} with ({', '.join(to_string(a) for a in args)})")
        try:
            return callee.call(self, args)
        except CosmoError as ex:
            # natives raise without a location; pin it to the call site
            if ex.token is None:
                raise CosmoError(ex.name, ex.message, paren) from ex
            raise

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        kind = operator.kind
        if kind == TokenType.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) or isinstance(b, str):
                return to_string(a) + to_string(b)
            raise CosmoError(
                'TypeError',
                f"Operands of '+' must be two numbers or include a string, got {type_name(a)} and {type_name(b)}.",
                operator,
            )
        if kind == TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if kind == TokenType.BANG_EQUAL:
            return not is_equal(a, b)

        self.check_number_operands(operator, a, b)
        if kind == TokenType.MINUS:
            return a - b
        if kind == TokenType.STAR:
            return a * b
        if kind == TokenType.SLASH:
            if b == 0:
                raise CosmoError('ZeroDivisionError', 'Division by zero.', operator)
            return a / b
        if kind == TokenType.GREATER:
            return a > b
        if kind == TokenType.GREATER_EQUAL:
            return a >= b
        if kind == TokenType.LESS:
            return a < b
        if kind == TokenType.LESS_EQUAL:
            return a <= b
        raise TypeError(f"Unknown binary operator {operator.lexeme}")

    def check_number_operand(self, operator: Token, operand: Any) -> None:
        if is_number(operand):
            return
        raise CosmoError('TypeError', f"Operand of '{operator.lexeme}' must be a number, got {type_name(operand)}.", operator)

    def check_number_operands(self, operator: Token, a: Any, b: Any) -> None:
        if is_number(a) and is_number(b):
            return
        raise CosmoError(
            'TypeError',
            f"Operands of '{operator.lexeme}' must be numbers, got {type_name(a)} and {type_name(b)}.",
            operator,
        )


def parse_program(source: str, diagnostics: Optional[Diagnostics] = None) -> List[Stmt]:
    """Scan and parse source text, raising CosmoSyntaxError if anything was reported."""
    if diagnostics is None:
        diagnostics = Diagnostics.to_stderr()
    tokens = Scanner(source, diagnostics).scan_tokens()
    statements = Parser(tokens, diagnostics).parse()
    if diagnostics.had_error:
        raise CosmoSyntaxError(diagnostics.items)
    return statements


def run_program(source: str, debug_level: int = 0) -> Interpreter:
    """Convenience function to scan, parse and run a Cosmo program from a string."""
    statements = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.interpret(statements)
    return interpreter
