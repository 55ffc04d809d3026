"""Graphviz visualization helpers for parsed expressions.

Provides `render_ast_dot(nodes)` which returns a `graphviz.Digraph` object
(not rendered). Optionally `write_and_render` can write the file to disk.

Layout: every top-level expression hangs off a single `program` root. Each
AST node becomes an HTML-like table node showing its kind on the first row
and its canonical source text on the second. Edges are labelled with the
role of the child (`arg[0]`, `elem[1]`, `key[0]`, `value`).
"""

from typing import Iterator, List, Tuple
import html
from graphviz import Digraph
from ast_nodes import *

# Longest source text shown inside a node before it is elided.
MAX_LABEL_CHARS = 40


def _children(node: ASTNode) -> Iterator[Tuple[str, ASTNode]]:
    match node:
        case AnonCallNode(arguments=args):
            for i, arg in enumerate(args):
                yield f"arg[{i}]", arg
        case AttributeNode(value=value):
            yield "value", value
        case ListNode(elements=elems) | TupleNode(elements=elems):
            for i, elem in enumerate(elems):
                yield f"elem[{i}]", elem
        case HashMapNode():
            for i, (key, value) in enumerate(node.entries()):
                yield f"key[{i}]", key
                yield f"value[{i}]", value


def _node_html(node: ASTNode) -> str:
    source = node.to_string()
    if len(source) > MAX_LABEL_CHARS:
        source = source[: MAX_LABEL_CHARS - 3] + "..."
    escaped = html.escape(source).replace("\n", "<br/>")
    # Avoid empty FONT elements which some Graphviz versions reject
    if not escaped.strip():
        escaped = "&nbsp;"
    return (
        '<<TABLE BORDER="0" CELLBORDER="1" CELLSPACING="0">'
        f"<TR><TD><B>{html.escape(str(node.kind()))}</B></TD></TR>"
        f'<TR><TD><FONT POINT-SIZE="10">{escaped}</FONT></TD></TR>'
        "</TABLE>>"
    )


def render_ast_dot(nodes: List[ASTNode]) -> Digraph:
    """Return a graphviz.Digraph for the given top-level expressions.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.node("program", label=f"program ({len(nodes)})", shape="box", style="rounded")

    counter = 0

    def emit(node: ASTNode) -> str:
        nonlocal counter
        name = f"n{counter}"
        counter += 1
        dot.node(name, label=_node_html(node), shape="plaintext")
        for role, child in _children(node):
            dot.edge(name, emit(child), label=role)
        return name

    for i, node in enumerate(nodes):
        dot.edge("program", emit(node), label=f"expr[{i}]")

    return dot


def write_and_render(nodes: List[ASTNode], out_path: str, fmt: str = "svg") -> None:
    """Write and render the AST to the given path (without extension).

    Example: write_and_render(nodes, 'out/ast', fmt='png') will create out/ast.png
    (requires Graphviz)."""
    dot = render_ast_dot(nodes)
    dot.format = fmt
    # Note: render will append extension automatically
    dot.render(out_path, cleanup=True)
