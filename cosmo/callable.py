"""Callable values: user-defined functions and native builtins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable as PyCallable, List

from .ast import Function
from .environment import Environment
from .errors import ReturnSignal

if TYPE_CHECKING:
    from .interpreter import Interpreter


class Callable(ABC):
    """Anything a Cosmo call expression can invoke."""

    @abstractmethod
    def arity(self) -> int:
        ...

    @abstractmethod
    def call(self, interpreter: 'Interpreter', args: List[Any]) -> Any:
        ...


class FunctionValue(Callable):
    """A user-defined function closed over the environment it was declared in."""
    def __init__(self, declaration: Function, closure: Environment):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', args: List[Any]) -> Any:
        # The frame's parent is the closure, not the caller's scope
        env = Environment(self.closure)
        for param, arg in zip(self.declaration.params, args):
            env.define(param.lexeme, arg)
        result = interpreter.execute_block(self.declaration.body, env)
        if isinstance(result, ReturnSignal):
            return result.value
        return None

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


class BuiltinFunction(Callable):
    """A native function with a fixed arity.

    `fn` receives the already arity-checked argument list and returns a
    Cosmo value.
    """
    def __init__(self, name: str, arity: int, fn: PyCallable[[List[Any]], Any]):
        self.name = name
        self._arity = arity
        self.fn = fn

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: 'Interpreter', args: List[Any]) -> Any:
        return self.fn(args)

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"
