"""Token definitions for the lexer.

This module defines the `TokenKind` enum for all token kinds recognized by
the lexer and a small immutable `Token` dataclass holding a kind, the exact
lexeme that was matched and the source position of its first character.
Tokens are the atomic units produced by the lexer and consumed by the parser.

Lexemes are never normalized: joining the lexemes of every token the lexer
produces gives back the original source text.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass, field


class TokenKind(Enum):
    # Punctuation with dedicated meaning
    AT = auto()
    COMMA = auto()
    DOT = auto()
    DELIMITER = auto()
    OPERATOR = auto()

    # Literals
    ATOM = auto()
    BOOLEAN = auto()
    CHAR = auto()
    NUMBER = auto()
    STRING = auto()
    CHARLIST = auto()

    IDENTIFIER = auto()

    # Trivia, kept in the raw stream for round-tripping
    COMMENT = auto()
    WHITESPACE = auto()

    # Special
    ILLEGAL = auto()
    EOF = auto()

    def __str__(self) -> str:
        return self.name

    @property
    def is_trivia(self) -> bool:
        return self in (TokenKind.WHITESPACE, TokenKind.COMMENT)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str = ""
    # 1-based position of the first character; not part of equality.
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind}, {repr(self.lexeme)})"

    def is_delimiter(self, lexeme: str) -> bool:
        return self.kind == TokenKind.DELIMITER and self.lexeme == lexeme

    def is_operator(self, lexeme: str) -> bool:
        return self.kind == TokenKind.OPERATOR and self.lexeme == lexeme

    @property
    def position(self) -> str:
        return f"line {self.line}, column {self.column}"
