"""
Parser for Elixir-style expressions.

Overview and approach:
- This parser is a small, hand-written recursive-descent parser over a token
    list produced by `lexer.Lexer`. The whole token list is materialized
    first; the parser never interleaves with the lexer.
- Whitespace and comment tokens are filtered out when the parser is built,
    and the EOF sentinel is dropped, so the grammar only ever sees
    significant tokens.

Key points:
- Expression dispatch:
    - `parse_expression()` looks at the current token and picks exactly one
        branch: `@` starts a module attribute, an identifier followed by `.`
        starts an anonymous call, literal tokens become literal nodes and
        `[`, `{`, `%{` open collection literals. There is no backtracking.
    - Anything else raises `UnrecognizedTokenError`. The grammar is partial
        on purpose: bare identifiers, operators, `do/end` blocks and the like
        are not expressions here.

- Collections and call arguments:
    - `collect_segments()` reads comma-separated token runs up to the matching
        closing delimiter, tracking nesting depth so that commas inside nested
        collections do not split the outer one.
    - Each run is parsed as exactly one expression by a nested `Parser`.
    - Map entries accept the keyword form (`id: 1`) and the arrow form
        (`"id" => 1`).

- Drivers:
    - `parse_next()` parses one top-level expression (None at the end).
    - `parse()` parses everything and raises the first error.
    - `parse_all()` keeps going after errors and returns nodes and errors in
        source order.

Examples:
    - `anon.("jhon", 42)`      -> AnonCall(anon, [String, Number])
    - `@moduledoc false`       -> Attribute(moduledoc, Boolean)
    - `%{id: 1, "k" => :v}`    -> HashMap([Atom, String], [Number, Atom])
"""

from __future__ import annotations
from typing import Callable, List, Optional, Tuple, Union
from tokens import Token, TokenKind
from ast_nodes import *

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = frozenset(OPENERS.values())


class ParseError(SyntaxError):
    """Base class for structural parse failures.

    `token` is the offending token when one is available.
    """

    def __init__(self, message: str, token: Optional[Token] = None):
        self.token = token
        if token is not None:
            message = f"{message} (got {token.kind} {token.lexeme!r} at {token.position})"
        super().__init__(message)


class UnexpectedEndError(ParseError):
    """The token list ran out while an expression still needed tokens."""

    def __init__(self, message: str, last: Optional[Token] = None):
        if last is not None:
            message = f"{message}: input ends after {last.lexeme!r} at {last.position}"
        super().__init__(message)
        self.token = last


class UnrecognizedTokenError(ParseError):
    """The current token cannot start (or continue) the expected construct."""


class EmptyScanError(ParseError):
    """A bounded scan, such as one collection element, consumed no tokens."""


class NestingTooDeepError(ParseError):
    """Collections or calls nest deeper than the interpreter stack allows.

    `token` is the first token of the nested element that could not be
    parsed.
    """


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = [
            t for t in tokens if not t.kind.is_trivia and t.kind != TokenKind.EOF
        ]
        self.pos = 0

    def is_done(self) -> bool:
        return self.pos >= len(self.tokens)

    def last_token(self) -> Optional[Token]:
        return self.tokens[-1] if self.tokens else None

    def peek(self, offset: int = 0) -> Token:
        """Return the token `offset` places ahead without consuming it."""
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        raise UnexpectedEndError("cannot read next token", self.last_token())

    def peek_optional(self, offset: int = 0) -> Optional[Token]:
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def advance(self) -> Token:
        """Consume and return the current token."""
        if self.is_done():
            raise UnexpectedEndError("cannot read current token", self.last_token())
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def expect_delimiter(self, lexeme: str) -> Token:
        token = self.advance()
        if not token.is_delimiter(lexeme):
            raise UnrecognizedTokenError(f"expected '{lexeme}'", token)
        return token

    def read_tokens_while(self, pred: Callable[[Token], bool]) -> List[Token]:
        """Consume tokens while `pred` holds; at least one must be consumed."""
        tokens: List[Token] = []
        while not self.is_done() and pred(self.peek()):
            tokens.append(self.advance())

        if not tokens:
            raise EmptyScanError(
                "failed to parse multiple tokens",
                self.peek_optional() or self.last_token(),
            )
        return tokens

    # ------------------------------------------------------------------ #
    # Drivers

    def parse_next(self) -> Optional[ASTNode]:
        """Parse one top-level expression, or return None when out of tokens."""
        if self.is_done():
            return None
        return self.parse_expression()

    def parse(self) -> List[ASTNode]:
        """Parse every top-level expression, raising on the first failure."""
        nodes: List[ASTNode] = []
        while (node := self.parse_next()) is not None:
            nodes.append(node)
        return nodes

    def parse_all(self) -> List[Union[ASTNode, ParseError]]:
        """Parse every top-level expression, collecting failures as values.

        After a failure parsing resumes at the first unconsumed token. If the
        failed attempt consumed nothing, the offending token is skipped.
        """
        results: List[Union[ASTNode, ParseError]] = []
        while not self.is_done():
            start = self.pos
            try:
                results.append(self.parse_expression())
            except ParseError as e:
                results.append(e)
                if self.pos == start:
                    self.pos += 1
        return results

    # ------------------------------------------------------------------ #
    # Expressions

    def parse_expression(self) -> ASTNode:
        token = self.peek()

        match token.kind:
            case TokenKind.AT:
                return self.parse_attribute()
            case TokenKind.IDENTIFIER:
                return self.parse_identifier()
            case TokenKind.NUMBER:
                self.advance()
                return NumberNode(token=token)
            case TokenKind.BOOLEAN:
                self.advance()
                return BooleanNode(token=token)
            case TokenKind.ATOM:
                self.advance()
                return AtomNode(token=token)
            case TokenKind.STRING:
                self.advance()
                return StringNode(token=token)
            case TokenKind.CHARLIST:
                self.advance()
                return CharlistNode(token=token)
            case TokenKind.DELIMITER:
                return self.parse_delimited()
            case _:
                raise UnrecognizedTokenError("cannot parse expression", token)

    def parse_attribute(self) -> AttributeNode:
        """Parse `@name value`."""
        self.advance()  # '@'
        name = self.advance()
        if name.kind != TokenKind.IDENTIFIER:
            raise UnrecognizedTokenError("expected attribute name", name)
        try:
            value = self.parse_expression()
        except RecursionError as e:
            raise NestingTooDeepError("expression nested too deeply", name) from e
        return AttributeNode(identifier=name, value=value)

    def parse_identifier(self) -> ASTNode:
        token = self.peek()
        ahead = self.peek_optional(1)
        if ahead is not None and ahead.kind == TokenKind.DOT and ahead.lexeme == ".":
            return self.parse_anon_call()
        raise UnrecognizedTokenError("cannot parse expression", token)

    def parse_anon_call(self) -> AnonCallNode:
        """Parse `name.(arg, ...)`."""
        identifier = self.advance()
        self.advance()  # '.'
        self.expect_delimiter("(")
        arguments = [self.parse_segment(s) for s in self.collect_segments(")")]
        return AnonCallNode(identifier=identifier, arguments=arguments)

    def parse_delimited(self) -> ASTNode:
        token = self.peek()

        match token.lexeme:
            case "[":
                self.advance()
                elements = [self.parse_segment(s) for s in self.collect_segments("]")]
                return ListNode(elements=elements)
            case "{":
                self.advance()
                elements = [self.parse_segment(s) for s in self.collect_segments("}")]
                return TupleNode(elements=elements)
            case "%":
                return self.parse_hashmap()
            case _:
                raise UnrecognizedTokenError("cannot parse expression", token)

    def parse_hashmap(self) -> HashMapNode:
        """Parse `%{key: value, key => value, ...}`."""
        self.advance()  # '%'
        self.expect_delimiter("{")
        keys: List[ASTNode] = []
        values: List[ASTNode] = []
        for segment in self.collect_segments("}"):
            key, value = self.parse_map_entry(segment)
            keys.append(key)
            values.append(value)
        return HashMapNode(keys=keys, values=values)

    def parse_map_entry(self, segment: List[Token]) -> Tuple[ASTNode, ASTNode]:
        first = segment[0]

        # Keyword form: `id: 1`, `Name: 1`, `"quoted": 1`
        if (
            len(segment) >= 2
            and is_keyword_key(first)
            and segment[1].is_operator(":")
        ):
            if len(segment) == 2:
                raise EmptyScanError("failed to parse multiple tokens", segment[1])
            key = AtomNode(
                token=Token(TokenKind.ATOM, ":" + first.lexeme, first.line, first.column)
            )
            return key, self.parse_segment(segment[2:])

        arrow = find_top_level(segment, lambda t: t.is_operator("=>"))
        if arrow is None:
            raise UnrecognizedTokenError("expected 'key: value' or 'key => value'", first)
        if arrow == 0 or arrow == len(segment) - 1:
            raise EmptyScanError("failed to parse multiple tokens", segment[arrow])

        return self.parse_segment(segment[:arrow]), self.parse_segment(segment[arrow + 1 :])

    # ------------------------------------------------------------------ #
    # Bounded scans

    def read_segment(self) -> List[Token]:
        """Read one element up to a top-level comma or closing delimiter."""
        depth = 0

        def in_segment(token: Token) -> bool:
            nonlocal depth
            if token.kind == TokenKind.DELIMITER:
                if token.lexeme in OPENERS:
                    depth += 1
                elif token.lexeme in CLOSERS:
                    if depth == 0:
                        return False
                    depth -= 1
            elif token.kind == TokenKind.COMMA and depth == 0:
                return False
            return True

        return self.read_tokens_while(in_segment)

    def collect_segments(self, closer: str) -> List[List[Token]]:
        """Collect comma-separated elements and consume the closing `closer`."""
        if self.peek().is_delimiter(closer):
            self.advance()
            return []

        segments: List[List[Token]] = []
        while True:
            segments.append(self.read_segment())
            token = self.advance()
            if token.kind == TokenKind.COMMA:
                continue
            if token.is_delimiter(closer):
                return segments
            raise UnrecognizedTokenError(f"expected ',' or '{closer}'", token)

    def parse_segment(self, segment: List[Token]) -> ASTNode:
        """Parse a token run that must hold exactly one expression."""
        try:
            sub = Parser(segment)
            node = sub.parse_expression()
        except RecursionError as e:
            raise NestingTooDeepError("expression nested too deeply", segment[0]) from e
        if not sub.is_done():
            raise UnrecognizedTokenError("unexpected token after expression", sub.peek())
        return node


def is_keyword_key(token: Token) -> bool:
    if token.kind == TokenKind.ATOM:
        # Aliases only; `:a: 1` is not a keyword entry.
        return not token.lexeme.startswith(":")
    return token.kind in (TokenKind.IDENTIFIER, TokenKind.BOOLEAN, TokenKind.STRING)


def find_top_level(segment: List[Token], pred: Callable[[Token], bool]) -> Optional[int]:
    """Index of the first token matching `pred` outside any nested delimiters."""
    depth = 0
    for i, token in enumerate(segment):
        if token.kind == TokenKind.DELIMITER:
            if token.lexeme in OPENERS:
                depth += 1
            elif token.lexeme in CLOSERS:
                depth -= 1
        elif depth == 0 and pred(token):
            return i
    return None
