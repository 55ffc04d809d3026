import json

from main import lex
from tests.utils import parse_text
from ast_json import ast_to_json, tokens_to_json, node_type_name
from ast_nodes import NodeKind


def test_ast_to_json_encodes_maps():
    data = ast_to_json(parse_text('%{id: 1, "k" => [true]}')[0])
    assert data["node_type"] == "HashMap"
    assert data["source"] == '%{id: 1, "k" => [true]}'

    first, second = data["entries"]
    assert first["key"]["node_type"] == "Atom"
    assert first["value"]["token"]["lexeme"] == "1"
    assert second["key"]["node_type"] == "String"
    assert second["value"]["node_type"] == "List"
    assert second["value"]["elements"][0]["token"]["kind"] == "BOOLEAN"

    # Must be serializable as-is
    assert json.loads(json.dumps(data)) == data


def test_ast_to_json_encodes_calls_and_attributes():
    data = ast_to_json(parse_text("@handler anon.(:ok)")[0])
    assert data["node_type"] == "Attribute"
    assert data["identifier"] == "handler"
    assert data["value"]["node_type"] == "AnonCall"
    assert data["value"]["arguments"][0]["source"] == ":ok"


def test_ast_to_json_none():
    assert ast_to_json(None) is None


def test_tokens_to_json():
    data = tokens_to_json(lex(":ok"))
    assert data[0] == {"kind": "ATOM", "lexeme": ":ok", "line": 1, "column": 1}
    assert data[-1] == {"kind": "EOF", "lexeme": "", "line": 1, "column": 4}


def test_node_type_names():
    assert node_type_name(NodeKind.ANON_CALL) == "AnonCall"
    assert node_type_name(NodeKind.HASH_MAP) == "HashMap"
    assert node_type_name(NodeKind.CHARLIST) == "Charlist"
