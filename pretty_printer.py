"""Pretty-printer for tokens and the AST.

Provides `PrettyPrinter.print_ast(node, indent, prefix)` which renders an
AST into a readable multi-line tree, and `PrettyPrinter.print_tokens(tokens)`
which lists a token stream one token per line. Both are intended for
debugging, tests and the command-line driver. Canonical source text comes
from `node.to_string()`, not from here.

Examples:
    PrettyPrinter.print_ast(attribute_node)
    PrettyPrinter.print_tokens(Lexer(text).tokenize(), limit=50)
"""

from __future__ import annotations
from typing import List, Optional
from ast_nodes import *


class PrettyPrinter:
    @staticmethod
    def print_tokens(tokens: List[Token], limit: Optional[int] = None) -> str:
        """List tokens with their index, kind, lexeme and position."""
        lines = [f"Tokens ({len(tokens)}):"]
        shown = tokens if limit is None else tokens[:limit]
        for i, token in enumerate(shown):
            lines.append(
                f"  {i:3}: {str(token.kind):<10} {token.lexeme!r} @{token.line}:{token.column}"
            )
        if len(shown) < len(tokens):
            lines.append(f"  ... and {len(tokens) - len(shown)} more")
        return "\n".join(lines)

    @staticmethod
    def print_ast(node: ASTNode, indent: int = 0, prefix: str = "") -> str:
        """Pretty print AST and return as string."""
        lines = []
        indent_str = " " * indent

        if not isinstance(node, ASTNode):
            lines.append(f"{indent_str}{prefix}{node}")
            return "\n".join(lines)

        match node:
            case AtomNode(token=tok):
                lines.append(f"{indent_str}{prefix}Atom({tok.lexeme})")

            case BooleanNode(token=tok):
                lines.append(f"{indent_str}{prefix}Boolean({tok.lexeme})")

            case NumberNode(token=tok):
                lines.append(f"{indent_str}{prefix}Number({tok.lexeme})")

            case StringNode(token=tok):
                lines.append(f"{indent_str}{prefix}String({tok.lexeme!r})")

            case CharlistNode(token=tok):
                lines.append(f"{indent_str}{prefix}Charlist({tok.lexeme!r})")

            case AnonCallNode(identifier=ident, arguments=args):
                lines.append(f"{indent_str}{prefix}AnonCall({ident.lexeme})")
                for i, arg in enumerate(args):
                    lines.append(PrettyPrinter.print_ast(arg, indent + 4, f"arg[{i}]: "))

            case AttributeNode(identifier=ident, value=value):
                lines.append(f"{indent_str}{prefix}Attribute(@{ident.lexeme})")
                lines.append(PrettyPrinter.print_ast(value, indent + 2, "value: "))

            case ListNode(elements=elems):
                lines.append(f"{indent_str}{prefix}List")
                for i, elem in enumerate(elems):
                    lines.append(PrettyPrinter.print_ast(elem, indent + 4, f"elem[{i}]: "))

            case TupleNode(elements=elems):
                lines.append(f"{indent_str}{prefix}Tuple")
                for i, elem in enumerate(elems):
                    lines.append(PrettyPrinter.print_ast(elem, indent + 4, f"elem[{i}]: "))

            case HashMapNode(keys=keys, values=values):
                lines.append(f"{indent_str}{prefix}HashMap")
                for i, (key, value) in enumerate(zip(keys, values)):
                    lines.append(PrettyPrinter.print_ast(key, indent + 4, f"key[{i}]: "))
                    lines.append(PrettyPrinter.print_ast(value, indent + 6, "value: "))

            case _:
                lines.append(f"{indent_str}{prefix}Unknown node type: {type(node)}")

        return "\n".join(line for line in lines if line)

    @staticmethod
    def print_program(nodes: List[ASTNode]) -> str:
        """Print a sequence of top-level expressions as one tree."""
        lines = [f"Program ({len(nodes)} expressions)"]
        for i, node in enumerate(nodes):
            lines.append(PrettyPrinter.print_ast(node, 4, f"expr[{i}]: "))
        return "\n".join(lines)
