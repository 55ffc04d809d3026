from lexer import Lexer
from parser import Parser
from tokens import Token, TokenKind


def lex(text: str):
    """Return a list of tokens for the given source text."""
    return Lexer(text).tokenize()


def significant(text: str):
    """Tokens the parser would see: no whitespace, comments or EOF."""
    return [
        t for t in lex(text) if not t.kind.is_trivia and t.kind != TokenKind.EOF
    ]


def kinds(tokens):
    return [t.kind for t in tokens]


def parse_text(text: str):
    """Convenience: lex+parse a source text into top-level AST nodes."""
    return Parser(Lexer(text).tokenize()).parse()
