"""Lexical scanner for the Cosmo language.

The scanner walks the source text once with a single forward cursor and
produces the list of tokens consumed by the parser. It never raises:
unterminated strings and unrecognized characters are reported to the
shared `Diagnostics` collector and scanning carries on, so the caller
always receives a token list ending in exactly one EOF token.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .errors import Diagnostics
from .tokens import KEYWORDS, KEYWORD_LITERALS, OPERATORS, Token, TokenType


class Scanner:
    def __init__(self, source: str, diagnostics: Optional[Diagnostics] = None):
        self.source = source
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics.to_stderr()
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        return self.tokens

    def scan_token(self) -> None:
        c = self.advance()
        if c in ' \r\t':
            return
        if c == '\n':
            self.line += 1
            return
        if c == '/' and self.match('/'):
            # A comment runs to the end of the line; the newline itself is
            # left for the main loop so the line counter stays right.
            while self.peek() != '\n' and not self.is_at_end():
                self.advance()
            return
        if c == '"':
            self.string()
            return
        if self.is_digit(c):
            self.number()
            return
        if self.is_alpha(c):
            self.identifier()
            return
        # Two character operators first, then the single character ones
        pair = c + self.peek()
        if pair in OPERATORS:
            self.advance()
            self.add_token(OPERATORS[pair])
            return
        if c in OPERATORS:
            self.add_token(OPERATORS[c])
            return
        self.diagnostics.report(self.line, '', f"Unexpected character {c!r}.")

    def string(self) -> None:
        start_line = self.line
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == '\n':
                self.line += 1
            self.advance()
        if self.is_at_end():
            self.diagnostics.report(start_line, '', 'Unterminated string.')
            return
        self.advance()  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        self.add_token(TokenType.STRING, value, line=start_line)

    def number(self) -> None:
        while self.is_digit(self.peek()):
            self.advance()
        # A fractional part needs at least one digit after the dot
        if self.peek() == '.' and self.is_digit(self.peek_next()):
            self.advance()
            while self.is_digit(self.peek()):
                self.advance()
        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self) -> None:
        while self.is_alpha(self.peek()) or self.is_digit(self.peek()):
            self.advance()
        text = self.source[self.start:self.current]
        kind = KEYWORDS.get(text, TokenType.IDENTIFIER)
        self.add_token(kind, KEYWORD_LITERALS.get(kind))

    # Cursor helpers

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    @staticmethod
    def is_digit(c: str) -> bool:
        return '0' <= c <= '9'

    @staticmethod
    def is_alpha(c: str) -> bool:
        return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'

    def add_token(self, kind: TokenType, literal: Any = None, line: Optional[int] = None) -> None:
        text = self.source[self.start:self.current]
        self.tokens.append(Token(kind, text, literal, self.line if line is None else line))


def scan(source: str, diagnostics: Optional[Diagnostics] = None) -> List[Token]:
    """Convert source text into a list of tokens ending with EOF."""
    return Scanner(source, diagnostics).scan_tokens()
