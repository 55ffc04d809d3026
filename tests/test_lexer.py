import pytest

from main import lex
from lexer import Lexer
from tokens import Token, TokenKind
from tests.utils import significant, kinds


SAMPLE = '''defmodule Service.Template do
  @moduledoc """
  Handles ?a and "quotes" inside.
  """
  @timeout 5_000 # ms
  @opts %{retries: 3, "mode" => :fast, tags: ['a', 'b']}
  handler.(:ok, {1.11e10, 0xFFF}) |> IO.inspect()
  x :: integer ; `weird
end
'''


def test_lexer_recognizes_atoms():
    tokens = lex(":enabled?")
    assert kinds(tokens) == [TokenKind.ATOM, TokenKind.EOF]
    assert tokens[0].lexeme == ":enabled?"


def test_lexer_recognizes_quoted_atom():
    tokens = lex(':"enabled?" :"quoted name"')
    atoms = [t for t in tokens if t.kind == TokenKind.ATOM]
    assert [t.lexeme for t in atoms] == [':"enabled?"', ':"quoted name"']


def test_lexer_recognizes_aliases():
    assert kinds(significant("Service.Template")) == [TokenKind.ATOM]
    assert [(t.kind, t.lexeme) for t in significant("Foo.bar")] == [
        (TokenKind.ATOM, "Foo"),
        (TokenKind.DOT, "."),
        (TokenKind.IDENTIFIER, "bar"),
    ]


def test_double_colon_is_an_operator_not_an_atom():
    tokens = significant("x :: integer")
    assert [(t.kind, t.lexeme) for t in tokens] == [
        (TokenKind.IDENTIFIER, "x"),
        (TokenKind.OPERATOR, "::"),
        (TokenKind.IDENTIFIER, "integer"),
    ]


def test_bare_colon_and_single_uppercase_letter_fall_through():
    assert [(t.kind, t.lexeme) for t in significant(":")] == [(TokenKind.OPERATOR, ":")]
    assert [(t.kind, t.lexeme) for t in significant("A")] == [(TokenKind.IDENTIFIER, "A")]


@pytest.mark.parametrize(
    "number", ["40", "11.45", "1.11e10", "0b1010", "0o17", "0xFFF", "1_000_000"]
)
def test_lexer_reads_numbers_verbatim(number):
    tokens = lex(number)
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.EOF]
    assert tokens[0].lexeme == number


def test_lexer_reads_booleans():
    tokens = significant("true false nil")
    assert kinds(tokens) == [TokenKind.BOOLEAN] * 3
    assert [t.lexeme for t in tokens] == ["true", "false", "nil"]


def test_lexer_reads_identifiers():
    for ident in ("defmodule", "_vroom", "enabled?", "save!", "café"):
        tokens = significant(ident)
        assert [(t.kind, t.lexeme) for t in tokens] == [(TokenKind.IDENTIFIER, ident)]


def test_lexer_reads_module_attribute():
    tokens = significant("@doc")
    assert [(t.kind, t.lexeme) for t in tokens] == [
        (TokenKind.AT, "@"),
        (TokenKind.IDENTIFIER, "doc"),
    ]


def test_lexer_reads_codepoints():
    for ch in ("?a", "?é", "?\\n"):
        tokens = lex(ch)
        assert kinds(tokens) == [TokenKind.CHAR, TokenKind.EOF]
        assert tokens[0].lexeme == ch


def test_question_mark_codepoint_is_one_token():
    tokens = significant("?? ?a?")
    assert [(t.kind, t.lexeme) for t in tokens] == [
        (TokenKind.CHAR, "??"),
        (TokenKind.CHAR, "?a?"),
    ]
    assert [(t.kind, t.lexeme) for t in significant("?,")] == [
        (TokenKind.CHAR, "?"),
        (TokenKind.COMMA, ","),
    ]


def test_lexer_reads_dots_and_ranges():
    assert [t.lexeme for t in significant("a.b")] == ["a", ".", "b"]
    dots = [t for t in significant("a..b") if t.kind == TokenKind.DOT]
    assert [t.lexeme for t in dots] == [".."]


def test_lexer_reads_delimiters():
    tokens = significant("{}()[]%")
    assert kinds(tokens) == [TokenKind.DELIMITER] * 7
    assert "".join(t.lexeme for t in tokens) == "{}()[]%"


def test_comma_is_its_own_kind():
    tokens = significant("1,2")
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.COMMA, TokenKind.NUMBER]


def test_lexer_reads_operators_as_maximal_runs():
    ops = (
        "- + / ^ ^^^ &&& & \\\\\\ * ** ! && <- || ||| == != =~ === !== "
        "< > <= >= |> <<< >>> <<~ ~>> <~ ~> <~> <|> +++ --- <> ++ -- => :: | //"
    )
    tokens = significant(ops)
    assert all(t.kind == TokenKind.OPERATOR for t in tokens)
    assert [t.lexeme for t in tokens] == ops.split()


def test_operator_run_stops_at_delimiters():
    tokens = significant("x+(1)")
    assert [(t.kind, t.lexeme) for t in tokens] == [
        (TokenKind.IDENTIFIER, "x"),
        (TokenKind.OPERATOR, "+"),
        (TokenKind.DELIMITER, "("),
        (TokenKind.NUMBER, "1"),
        (TokenKind.DELIMITER, ")"),
    ]


def test_lexer_reads_comment_to_end_of_line():
    tokens = lex("# hello\n:ok")
    assert [(t.kind, t.lexeme) for t in tokens] == [
        (TokenKind.COMMENT, "# hello"),
        (TokenKind.WHITESPACE, "\n"),
        (TokenKind.ATOM, ":ok"),
        (TokenKind.EOF, ""),
    ]


def test_lexer_reads_strings():
    for text in ('"hello, world"', '"hello, #{name}"', '"hello, \\n\\n world"', '"say \\"hi\\""', '""'):
        tokens = lex(text)
        assert kinds(tokens) == [TokenKind.STRING, TokenKind.EOF]
        assert tokens[0].lexeme == text


def test_lexer_reads_charlists():
    for text in ("'hello, world'", "'''\n  multi\n'''"):
        tokens = lex(text)
        assert kinds(tokens) == [TokenKind.CHARLIST, TokenKind.EOF]
        assert tokens[0].lexeme == text


def test_lexer_reads_heredoc():
    heredoc = '"""\nola\n"""'
    tokens = lex(heredoc)
    assert kinds(tokens) == [TokenKind.STRING, TokenKind.EOF]
    assert tokens[0].lexeme == heredoc

    indented = '"""\n              hello, world!\n            """'
    tokens = lex(indented + " :after")
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].lexeme == indented
    assert tokens[2].lexeme == ":after"


def test_unterminated_literals_become_illegal():
    for text in ('"abc', '"""\nabc\n""', "'abc", ':"abc'):
        tokens = lex(text)
        assert kinds(tokens) == [TokenKind.ILLEGAL, TokenKind.EOF]
        assert tokens[0].lexeme == text


def test_unknown_characters_become_illegal_runs():
    tokens = lex(";; `x 1")
    assert [(t.kind, t.lexeme) for t in tokens if not t.kind.is_trivia] == [
        (TokenKind.ILLEGAL, ";;"),
        (TokenKind.ILLEGAL, "`x"),
        (TokenKind.NUMBER, "1"),
        (TokenKind.EOF, ""),
    ]


def test_empty_input_yields_only_eof():
    assert lex("") == [Token(TokenKind.EOF, "")]


def test_lexer_is_a_lazy_single_pass_iterator():
    lexer = Lexer("a")
    assert next(lexer) == Token(TokenKind.IDENTIFIER, "a")
    assert next(lexer).kind == TokenKind.EOF
    with pytest.raises(StopIteration):
        next(lexer)
    assert lexer.get_next_token() is None
    assert lexer.tokenize() == []


def test_tokens_record_line_and_column():
    tokens = significant("a\n  :b")
    assert (tokens[0].line, tokens[0].column) == (1, 1)
    assert (tokens[1].line, tokens[1].column) == (2, 3)


def test_anon_call_tokens():
    tokens = significant('anon.("jhon", 42)')
    assert kinds(tokens) == [
        TokenKind.IDENTIFIER,
        TokenKind.DOT,
        TokenKind.DELIMITER,
        TokenKind.STRING,
        TokenKind.COMMA,
        TokenKind.NUMBER,
        TokenKind.DELIMITER,
    ]


def test_lexemes_round_trip_to_the_input():
    tokens = lex(SAMPLE)
    assert tokens[-1].kind == TokenKind.EOF
    assert "".join(t.lexeme for t in tokens) == SAMPLE


def test_round_trip_survives_garbage():
    text = '"""open ?\t@@ ::: éé ;;; "unterminated'
    assert "".join(t.lexeme for t in lex(text)) == text


def test_single_tokens_relex_to_the_same_kind():
    source = '@attr %{id: :ok, "k" => [1, 0xFF]} # note'
    for token in lex(source)[:-1]:
        again = lex(token.lexeme)
        assert len(again) == 2, token
        assert again[0].kind == token.kind, token
        assert again[0].lexeme == token.lexeme
