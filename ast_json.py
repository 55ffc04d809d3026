"""Convert AST nodes and tokens into JSON-serializable structures.

This module provides `ast_to_json(node)`, which returns a nested structure
of dicts/lists/primitives describing an AST node, and `tokens_to_json(tokens)`
for raw token streams. Every node dict carries a `node_type` key and the
node's canonical `source` text.
"""

from typing import Any, Dict, List, Optional
from ast_nodes import *


def token_to_json(token: Token) -> Dict[str, Any]:
    return {
        "kind": token.kind.name,
        "lexeme": token.lexeme,
        "line": token.line,
        "column": token.column,
    }


def tokens_to_json(tokens: List[Token]) -> List[Dict[str, Any]]:
    return [token_to_json(t) for t in tokens]


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    t = node.kind()
    data: Dict[str, Any]

    # literals
    if isinstance(node, LiteralNode):
        data = {"node_type": node_type_name(t), "token": token_to_json(node.token)}
    elif t == NodeKind.ANON_CALL and isinstance(node, AnonCallNode):
        data = {
            "node_type": "AnonCall",
            "identifier": node.identifier.lexeme,
            "arguments": [ast_to_json(a) for a in node.arguments],
        }
    elif t == NodeKind.ATTRIBUTE and isinstance(node, AttributeNode):
        data = {
            "node_type": "Attribute",
            "identifier": node.identifier.lexeme,
            "value": ast_to_json(node.value),
        }
    # collections
    elif t in (NodeKind.LIST, NodeKind.TUPLE) and isinstance(node, (ListNode, TupleNode)):
        data = {
            "node_type": node_type_name(t),
            "elements": [ast_to_json(e) for e in node.elements],
        }
    elif t == NodeKind.HASH_MAP and isinstance(node, HashMapNode):
        data = {
            "node_type": "HashMap",
            "entries": [
                {"key": ast_to_json(k), "value": ast_to_json(v)}
                for k, v in node.entries()
            ],
        }
    else:
        data = {"node_type": getattr(t, "name", str(t))}

    data["source"] = node.to_string()
    return data


def node_type_name(kind: NodeKind) -> str:
    """`NodeKind.HASH_MAP` -> `HashMap`."""
    return "".join(part.capitalize() for part in kind.name.split("_"))
