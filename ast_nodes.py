"""AST node definitions for Elixir-style expressions.

This module defines the concrete AST node dataclasses produced by the parser.
The vocabulary is intentionally small and closed: literal nodes wrapping a
single token, anonymous-function calls, module attributes and the three
collection literals (lists, tuples and maps). The `NodeKind` enum identifies
node kinds and is used by the pretty-printer, the JSON exporter and the
Graphviz renderer.

Conventions:
- All AST node dataclasses inherit from `ASTNode`, which records the node
    kind and exposes `kind()` and `to_string()`. `to_string()` renders
    canonical source text; `str(node)` is the same thing.
- Nodes are frozen once the parser builds them. Child sequences are stored
    as tuples (lists passed in are converted), so nodes are hashable.
- Collections render their children in order, joined by `", "`.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum, auto
from typing import List, Tuple
from tokens import Token, TokenKind


class NodeKind(Enum):
    ANON_CALL = auto()
    ATOM = auto()
    ATTRIBUTE = auto()
    BOOLEAN = auto()
    CHARLIST = auto()
    LIST = auto()
    NUMBER = auto()
    STRING = auto()
    TUPLE = auto()
    HASH_MAP = auto()

    def __str__(self) -> str:
        return self.name


# Base AST Node
@dataclass(frozen=True)
class ASTNode:
    type: NodeKind

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, list):
                object.__setattr__(self, f.name, tuple(value))

    def kind(self) -> NodeKind:
        return self.type

    def to_string(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string()


# Literal Nodes
@dataclass(frozen=True)
class LiteralNode(ASTNode):
    token: Token = field(default_factory=lambda: Token(TokenKind.ILLEGAL))

    def to_string(self) -> str:
        return self.token.lexeme


@dataclass(frozen=True)
class AtomNode(LiteralNode):
    type: NodeKind = NodeKind.ATOM

    @property
    def name(self) -> str:
        """Atom text without the leading colon (`:ok` -> `ok`)."""
        return self.token.lexeme.removeprefix(":")


@dataclass(frozen=True)
class BooleanNode(LiteralNode):
    type: NodeKind = NodeKind.BOOLEAN


@dataclass(frozen=True)
class CharlistNode(LiteralNode):
    type: NodeKind = NodeKind.CHARLIST


@dataclass(frozen=True)
class NumberNode(LiteralNode):
    type: NodeKind = NodeKind.NUMBER


@dataclass(frozen=True)
class StringNode(LiteralNode):
    type: NodeKind = NodeKind.STRING


# Call and attribute Nodes
@dataclass(frozen=True)
class AnonCallNode(ASTNode):
    type: NodeKind = NodeKind.ANON_CALL
    identifier: Token = field(default_factory=lambda: Token(TokenKind.IDENTIFIER))
    arguments: Tuple[ASTNode, ...] = field(default_factory=tuple)

    def to_string(self) -> str:
        args = ", ".join(arg.to_string() for arg in self.arguments)
        return f"{self.identifier.lexeme}.({args})"


@dataclass(frozen=True)
class AttributeNode(ASTNode):
    type: NodeKind = NodeKind.ATTRIBUTE
    identifier: Token = field(default_factory=lambda: Token(TokenKind.IDENTIFIER))
    value: ASTNode = field(default_factory=lambda: BooleanNode(token=Token(TokenKind.BOOLEAN, "nil")))

    def to_string(self) -> str:
        return f"@{self.identifier.lexeme} {self.value.to_string()}"


# Collection Nodes
@dataclass(frozen=True)
class ListNode(ASTNode):
    type: NodeKind = NodeKind.LIST
    elements: Tuple[ASTNode, ...] = field(default_factory=tuple)

    def to_string(self) -> str:
        return "[" + ", ".join(e.to_string() for e in self.elements) + "]"


@dataclass(frozen=True)
class TupleNode(ASTNode):
    type: NodeKind = NodeKind.TUPLE
    elements: Tuple[ASTNode, ...] = field(default_factory=tuple)

    def to_string(self) -> str:
        return "{" + ", ".join(e.to_string() for e in self.elements) + "}"


@dataclass(frozen=True)
class HashMapNode(ASTNode):
    type: NodeKind = NodeKind.HASH_MAP
    # Parallel tuples: keys[i] maps to values[i].
    keys: Tuple[ASTNode, ...] = field(default_factory=tuple)
    values: Tuple[ASTNode, ...] = field(default_factory=tuple)

    def entries(self) -> List[tuple[ASTNode, ASTNode]]:
        return list(zip(self.keys, self.values))

    def to_string(self) -> str:
        elems = []
        for key, value in self.entries():
            if isinstance(key, AtomNode):
                elems.append(f"{key.name}: {value.to_string()}")
            else:
                elems.append(f"{key.to_string()} => {value.to_string()}")
        return "%{" + ", ".join(elems) + "}"
