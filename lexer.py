"""
Lexer for Elixir-style source text.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    transforms an input source string into a lazy stream of `Token` objects
    defined in `tokens.py`.
- It recognizes atoms (`:ok`, `:"quoted"`, `Service.Template`), booleans
    (`true`, `false`, `nil`), codepoints (`?a`), numbers in every notation
    (`42`, `11.45`, `1.11e10`, `0b1010`, `0o17`, `0xFFF`), strings and
    charlists (including `\"\"\"` / `'''` heredocs), comments, delimiters,
    dots, commas, `@` and an open alphabet of operators (`|>`, `<<<`, `!==`).
- Whitespace and comments are emitted as tokens rather than skipped, so the
    lexemes of a full token stream concatenate back to the input.

Examples:
    Input:  "@timeout 5_000"
    Tokens: [AT('@'), IDENTIFIER('timeout'), WHITESPACE(' '), NUMBER('5_000'), EOF]

Implementation notes:
- The lexer is a simple stateful scanner using `self.pos` and `self.current_char`.
- Dispatch order matters because many classes share leading characters: a
    leading `:` is an atom only when followed by an alphanumeric or a quote,
    otherwise it is scanned as an operator (so `::` stays one token).
- The lexer never raises. Input it cannot classify, and quoted literals that
    are never closed, come back as `ILLEGAL` tokens. Every branch consumes at
    least one character so scanning always terminates.
"""

from __future__ import annotations
import string
from typing import Callable, Iterator, List, Optional
from tokens import Token, TokenKind

DELIMITERS = frozenset("()[]{}%")
QUOTES = frozenset("\"'")
BOOLEANS = frozenset(("true", "false", "nil"))

# Line-boundary markers that end a comment.
COMMENT_TERMINATORS = frozenset("\n\r\t")

# ASCII punctuation minus characters that start other token classes or can
# never appear inside an operator. `:` stays in so `::` scans as one token.
OPERATOR_CHARS = frozenset(string.punctuation) - frozenset("`_@,;#.?\"'()[]{}%")


def is_ascii_punctuation(ch: str) -> bool:
    return ch in string.punctuation


def is_operator(ch: str) -> bool:
    return ch in OPERATOR_CHARS


def is_atom_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_?!"


def is_codepoint_char(ch: str) -> bool:
    return ch.isalnum() or ch == "?"


def is_number_char(ch: str) -> bool:
    return (ch.isascii() and ch.isalnum()) or ch in "._"


def is_identifier(ch: str) -> bool:
    if ch.isspace():
        return False
    return ch.isalnum() or ch in "_?!" or not is_ascii_punctuation(ch)


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char = self.text[self.pos] if self.text else None

        # Where the token being scanned started.
        self.start = 0
        self.start_line = 1
        self.start_column = 1

        self.finished = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.get_next_token()
        if token is None:
            raise StopIteration
        return token

    def advance(self) -> None:
        """Advance to next character."""
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def peek_char(self, offset: int = 1) -> Optional[str]:
        """Look `offset` characters ahead without consuming anything."""
        next_pos = self.pos + offset
        if next_pos < len(self.text):
            return self.text[next_pos]
        return None

    def is_done(self) -> bool:
        return self.pos >= len(self.text)

    def mark(self) -> None:
        self.start = self.pos
        self.start_line = self.line
        self.start_column = self.column

    def make_token(self, kind: TokenKind) -> Token:
        return Token(
            kind, self.text[self.start : self.pos], self.start_line, self.start_column
        )

    def consume_while(self, pred: Callable[[str], bool]) -> None:
        while self.current_char is not None and pred(self.current_char):
            self.advance()

    def comment(self) -> Token:
        """Scan a `#` comment up to (not including) the end of the line."""
        self.consume_while(lambda ch: ch not in COMMENT_TERMINATORS)
        return self.make_token(TokenKind.COMMENT)

    def codepoint(self) -> Token:
        """Scan a codepoint literal such as `?a`, `?é`, `??` or `?\\n`."""
        self.advance()  # '?'
        if self.current_char == "\\" and self.peek_char() is not None:
            self.advance()
            self.advance()
        self.consume_while(is_codepoint_char)
        return self.make_token(TokenKind.CHAR)

    def quoted(self, quote: str, kind: TokenKind) -> Token:
        """Scan a single-line or heredoc literal delimited by `quote`."""
        if self.peek_char(1) == quote and self.peek_char(2) == quote:
            return self.heredoc(quote, kind)

        self.advance()  # opening quote
        while self.current_char is not None:
            if self.current_char == "\\":
                self.advance()
                if self.current_char is not None:
                    self.advance()
                continue

            if self.current_char == quote:
                self.advance()
                return self.make_token(kind)

            self.advance()

        return self.make_token(TokenKind.ILLEGAL)

    def heredoc(self, quote: str, kind: TokenKind) -> Token:
        """Scan a triple-quoted literal up to the matching triple quote."""
        for _ in range(3):
            self.advance()

        # Consecutive unescaped closing quotes seen so far.
        run = 0
        while self.current_char is not None:
            ch = self.current_char
            self.advance()

            if ch == "\\":
                if self.current_char is not None:
                    self.advance()
                run = 0
            elif ch == quote:
                run += 1
                if run == 3:
                    return self.make_token(kind)
            else:
                run = 0

        return self.make_token(TokenKind.ILLEGAL)

    def atom(self) -> Optional[Token]:
        """Scan an atom or alias, or return None when the lookahead rules it out.

        Nothing is consumed when None is returned, so the caller can fall
        through to operator (`::`) or identifier (`A`) scanning.
        """
        ahead = self.peek_char()
        if ahead is None:
            return None

        if self.current_char == ":" and ahead in QUOTES:
            self.advance()  # ':'
            return self.quoted(ahead, TokenKind.ATOM)

        if not (ahead.isalnum() or ahead == "_"):
            return None

        alias = self.current_char.isupper()
        self.advance()
        while self.current_char is not None:
            if is_atom_char(self.current_char):
                self.advance()
            elif alias and self.current_char == "." and (self.peek_char() or "").isupper():
                # Nested alias segment: Service.Template
                self.advance()
            else:
                break

        return self.make_token(TokenKind.ATOM)

    def identifier(self) -> Token:
        """Scan an identifier, reclassifying `true`/`false`/`nil` as booleans."""
        self.consume_while(is_identifier)
        token = self.make_token(TokenKind.IDENTIFIER)
        if token.lexeme in BOOLEANS:
            return self.make_token(TokenKind.BOOLEAN)
        return token

    def get_next_token(self) -> Optional[Token]:
        """Return the next token, an EOF token once, then None forever."""
        if self.finished:
            return None

        self.mark()
        if self.current_char is None:
            self.finished = True
            return self.make_token(TokenKind.EOF)

        c = self.current_char

        if c.isspace():
            self.consume_while(str.isspace)
            return self.make_token(TokenKind.WHITESPACE)

        match c:
            case ",":
                self.advance()
                return self.make_token(TokenKind.COMMA)
            case "@":
                self.advance()
                return self.make_token(TokenKind.AT)
            case "#":
                return self.comment()
            case "?":
                return self.codepoint()
            case ".":
                # A run of dots covers member access and the `..` range.
                self.consume_while(lambda ch: ch == ".")
                return self.make_token(TokenKind.DOT)
            case '"':
                return self.quoted('"', TokenKind.STRING)
            case "'":
                return self.quoted("'", TokenKind.CHARLIST)

        if c.isupper() or c == ":":
            token = self.atom()
            if token is not None:
                return token

        if c in DELIMITERS:
            self.advance()
            return self.make_token(TokenKind.DELIMITER)

        if is_operator(c):
            self.consume_while(is_operator)
            return self.make_token(TokenKind.OPERATOR)

        if c in string.digits:
            self.consume_while(is_number_char)
            return self.make_token(TokenKind.NUMBER)

        if is_identifier(c):
            return self.identifier()

        # Nothing matched: swallow up to the next whitespace so we keep moving.
        self.consume_while(lambda ch: not ch.isspace())
        return self.make_token(TokenKind.ILLEGAL)

    def tokenize(self) -> List[Token]:
        """Return all remaining tokens, ending with EOF."""
        return list(self)
