import sys
from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from cosmo.tokens import Token, TokenType


class CosmoError(Exception):
    """Exception type used to propagate Cosmo runtime errors."""
    def __init__(self, name: str, message: str, token: Optional[Token] = None):
        text = f"{name}: {message}"
        if token is not None:
            text += f"\n[line {token.line}]"
        super().__init__(text)
        self.name = name
        self.message = message
        self.token = token


class ParseError(Exception):
    """Raised inside the parser at the point a grammar violation is detected."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class CosmoSyntaxError(Exception):
    """Raised by drivers when a program cannot run because it failed to scan or parse."""
    def __init__(self, diagnostics: List['Diagnostic']):
        super().__init__('\n'.join(str(d) for d in diagnostics))
        self.diagnostics = diagnostics


@dataclass(frozen=True)
class Diagnostic:
    line: int
    where: str
    message: str

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class Diagnostics:
    """Collects lexical and syntax problems reported while scanning and parsing.

    Every reported diagnostic is kept in `items`. If a stream is given, the
    rendered diagnostic is also written to it as soon as it is reported.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.items: List[Diagnostic] = []

    @property
    def had_error(self) -> bool:
        return bool(self.items)

    def report(self, line: int, where: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(line, where, message)
        self.items.append(diagnostic)
        if self.stream is not None:
            print(diagnostic, file=self.stream)
        return diagnostic

    def error_at(self, token: Token, message: str) -> Diagnostic:
        if token.kind == TokenType.EOF:
            return self.report(token.line, ' at end', message)
        return self.report(token.line, f" at '{token.lexeme}'", message)

    @classmethod
    def to_stderr(cls) -> 'Diagnostics':
        return cls(stream=sys.stderr)


class ReturnSignal:
    """Result of executing a `return` statement.

    Statement execution hands this object back up the tree instead of
    raising, so only the call mechanism consumes it and every enclosing
    block simply passes it on.
    """
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"
