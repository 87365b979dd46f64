"""Tokens produced by the scanner. A Token is immutable once the scanner has built it."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class TokenType(Enum):
    # single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # one or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # keywords
    AND = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS = {
    "and": TokenType.AND,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

# keywords that are reserved but have no grammar production
RESERVED = (TokenType.FOR, TokenType.FUN, TokenType.RETURN, TokenType.WHILE)

# tokens that can start a statement, used by the parser to resynchronize after an error
STATEMENT_START = (TokenType.FUN, TokenType.VAR, TokenType.FOR, TokenType.IF, TokenType.WHILE, TokenType.PRINT,
                   TokenType.RETURN)


@dataclass(frozen=True)
class Token:
    """A lexeme together with its type, literal payload (numbers and strings only) and source line."""
    type: TokenType
    lexeme: str
    literal: Optional[Union[float, str]]
    line: int

    def __repr__(self):
        if self.literal is None:
            return f"Token({self.type.name}, '{self.lexeme}', line={self.line})"
        return f"Token({self.type.name}, '{self.lexeme}', {self.literal!r}, line={self.line})"

    def __str__(self):
        return self.lexeme
