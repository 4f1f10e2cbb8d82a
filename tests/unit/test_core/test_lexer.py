"""Tests for the argument text tokenizer."""

import pytest

from sqlproc.core.lexer import EOF_VALUE, Lexer, LexerState, Token, TokenType, tokenize
from sqlproc.exceptions import LexError


def _kinds(text: str) -> "list[TokenType]":
    return [token.type for token in tokenize(text)]


def test_named_assignments_are_split_into_tokens() -> None:
    tokens = tokenize("@one = 24,   @two")

    assert tokens == [
        Token(TokenType.TEXT, "@one", 0),
        Token(TokenType.WHITESPACE, " ", 4),
        Token(TokenType.EQUALS, "=", 5),
        Token(TokenType.WHITESPACE, " ", 6),
        Token(TokenType.TEXT, "24", 7),
        Token(TokenType.COMMA, ",", 9),
        Token(TokenType.WHITESPACE, "   ", 10),
        Token(TokenType.TEXT, "@two", 13),
        Token(TokenType.EOF, EOF_VALUE, 17),
    ]


def test_empty_input_yields_only_eof() -> None:
    assert tokenize("") == [Token(TokenType.EOF, EOF_VALUE, 0)]


def test_eof_position_is_input_length() -> None:
    text = "1, 'two', @three"
    tokens = tokenize(text)

    assert tokens[-1].is_eof
    assert tokens[-1].position == len(text)
    assert sum(1 for token in tokens if token.is_eof) == 1


def test_quoted_literal_keeps_escaped_quotes() -> None:
    tokens = tokenize("'O''Brien'")

    assert tokens[0] == Token(TokenType.QUOTED, "'O''Brien'", 0)
    assert tokens[1].is_eof


def test_quoted_literal_may_contain_separators() -> None:
    tokens = tokenize("'a, b = c'")

    assert [token.type for token in tokens] == [TokenType.QUOTED, TokenType.EOF]
    assert tokens[0].value == "'a, b = c'"


def test_empty_quoted_literal() -> None:
    assert tokenize("''")[0] == Token(TokenType.QUOTED, "''", 0)


def test_text_ends_at_quote_without_consuming_it() -> None:
    assert _kinds("N'abc'") == [TokenType.TEXT, TokenType.QUOTED, TokenType.EOF]


def test_text_glued_to_keyword_is_one_token() -> None:
    tokens = tokenize("5OUTPUT")

    assert tokens[0] == Token(TokenType.TEXT, "5OUTPUT", 0)
    assert tokens[1].is_eof


def test_mixed_whitespace_is_one_token() -> None:
    tokens = tokenize("1 \t\n 2")

    assert tokens[1] == Token(TokenType.WHITESPACE, " \t\n ", 1)


def test_adjacent_separators() -> None:
    assert _kinds(",,=") == [TokenType.COMMA, TokenType.COMMA, TokenType.EQUALS, TokenType.EOF]


def test_trailing_separator_is_flushed() -> None:
    assert _kinds("1,") == [TokenType.TEXT, TokenType.COMMA, TokenType.EOF]


@pytest.mark.parametrize("text", ["'abc", "1, 'abc", "'it''s", "''' "])
def test_unterminated_literal_raises(text: str) -> None:
    with pytest.raises(LexError) as exc_info:
        tokenize(text)

    assert exc_info.value.position == len(text)
    assert exc_info.value.state is LexerState.QUOTED
    assert "closing single quote" in str(exc_info.value)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "@Id = 5, @Name = 'O''Brien'",
        "10, 20 OUTPUT",
        "{@Value}, NULL,@p3=@Other out",
        "'a''''b' ,= x\ty",
        "1.5,.5,  'x'",
    ],
)
def test_tokens_reproduce_input(text: str) -> None:
    tokens = tokenize(text)

    assert "".join(token.value for token in tokens if not token.is_eof) == text
    offset = 0
    for token in tokens[:-1]:
        assert token.position == offset
        offset += len(token.value)
    assert tokens[-1].position == offset


def test_tokenize_is_deterministic() -> None:
    text = "@a = 'x''y' OUTPUT, 2"
    lexer = Lexer()

    assert lexer.tokenize(text) == lexer.tokenize(text) == tokenize(text)


def test_token_repr_and_str() -> None:
    token = Token(TokenType.TEXT, "@a", 3)

    assert str(token) == "@a"
    assert repr(token) == "Token(TEXT, '@a', 3)"
    assert hash(token) == hash(Token(TokenType.TEXT, "@a", 3))
    assert token != Token(TokenType.TEXT, "@a", 4)
