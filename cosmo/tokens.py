"""Token definitions for the Cosmo language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class TokenType(Enum):
    # Single-character tokens
    LEFT_PAREN = 'Left Parenthesis'
    RIGHT_PAREN = 'Right Parenthesis'
    LEFT_BRACE = 'Left Brace'
    RIGHT_BRACE = 'Right Brace'
    COMMA = 'Comma'
    DOT = 'Dot'
    MINUS = 'Minus'
    PLUS = 'Plus'
    SEMICOLON = 'Semicolon'
    SLASH = 'Slash'
    STAR = 'Star'

    # One or two character tokens
    BANG = 'Bang'
    BANG_EQUAL = 'Bang Equal'
    EQUAL = 'Equal'
    EQUAL_EQUAL = 'Equal Equal'
    GREATER = 'Greater'
    GREATER_EQUAL = 'Greater Equal'
    LESS = 'Less'
    LESS_EQUAL = 'Less Equal'

    # Literals
    IDENTIFIER = 'Identifier'
    STRING = 'String'
    NUMBER = 'Number'

    # Keywords
    AND = 'And'
    ELSE = 'Else'
    FALSE = 'False'
    FUNC = 'Function'
    FOR = 'For'
    IF = 'If'
    NIL = 'Nil'
    OR = 'Or'
    OUTPUT = 'Output'
    RETURN = 'Return'
    TRUE = 'True'
    CREATE = 'Create'
    WHILE = 'While'

    EOF = 'End of File'


KEYWORDS: Dict[str, TokenType] = {
    'and': TokenType.AND,
    'else': TokenType.ELSE,
    'false': TokenType.FALSE,
    'func': TokenType.FUNC,
    'for': TokenType.FOR,
    'if': TokenType.IF,
    'nil': TokenType.NIL,
    'or': TokenType.OR,
    'output': TokenType.OUTPUT,
    'return': TokenType.RETURN,
    'true': TokenType.TRUE,
    'create': TokenType.CREATE,
    'while': TokenType.WHILE,
}

# Literal values carried by the value keywords.
KEYWORD_LITERALS: Dict[TokenType, Any] = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NIL: None,
}

# Operator and punctuation lexemes, longest first.
OPERATORS: Dict[str, TokenType] = {
    '!=': TokenType.BANG_EQUAL,
    '==': TokenType.EQUAL_EQUAL,
    '>=': TokenType.GREATER_EQUAL,
    '<=': TokenType.LESS_EQUAL,
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '/': TokenType.SLASH,
    '*': TokenType.STAR,
    '!': TokenType.BANG,
    '=': TokenType.EQUAL,
    '>': TokenType.GREATER,
    '<': TokenType.LESS,
}


@dataclass(frozen=True)
class Token:
    kind: TokenType
    lexeme: str
    literal: Any
    line: int

    def __str__(self) -> str:
        return f"{self.kind.name} {self.lexeme} {self.literal}"
