"""Tokenizer for the argument text of a stored procedure call.

The lexer is a single-pass, character-at-a-time state machine. On every step
the current state looks at one character and decides whether to change
state, consume the character, and/or emit a token. After the last character
the machine runs once more with an end-of-input marker so that pending
tokens are flushed, then a single ``EOF`` token is appended.

Example::

    "@one = 24,   @two"

    TEXT "@one", WHITESPACE " ", EQUALS "=", WHITESPACE " ", TEXT "24",
    COMMA ",", WHITESPACE "   ", TEXT "@two", EOF "[end of input]"

Doubled quotes inside a quoted literal (``'O''Brien'``) are kept verbatim in
the ``QUOTED`` token; unescaping is left to the literal evaluator.
"""

from enum import Enum
from typing import Final

from mypy_extensions import mypyc_attr

from sqlproc.exceptions import LexError

__all__ = ("EOF_VALUE", "Lexer", "LexerState", "Token", "TokenType", "tokenize")

EOF_VALUE: Final[str] = "[end of input]"

# End-of-input marker fed to the state machine after the last character.
_END: Final[str] = ""

TOKEN_SLOTS = ("position", "type", "value")


class TokenType(Enum):
    """Types of tokens recognized in a call's argument text."""

    TEXT = "TEXT"
    QUOTED = "QUOTED"
    WHITESPACE = "WHITESPACE"
    COMMA = "COMMA"
    EQUALS = "EQUALS"
    EOF = "EOF"


class LexerState(Enum):
    """Internal states of the tokenizer."""

    DEFAULT = "DEFAULT"
    TEXT = "TEXT"
    QUOTED = "QUOTED"
    QUOTED_POTENTIAL_END = "QUOTED_POTENTIAL_END"
    WHITESPACE = "WHITESPACE"
    COMMA = "COMMA"
    EQUALS = "EQUALS"


@mypyc_attr(allow_interpreted_subclasses=True)
class Token:
    """A classified substring of the input, starting at ``position``."""

    __slots__ = TOKEN_SLOTS

    def __init__(self, type: TokenType, value: str, position: int) -> None:  # noqa: A002
        self.type = type
        self.value = value
        self.position = position

    @property
    def is_eof(self) -> bool:
        return self.type is TokenType.EOF

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return False
        return self.type is other.type and self.value == other.value and self.position == other.position

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.position))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.position})"


@mypyc_attr(allow_interpreted_subclasses=True)
class Lexer:
    """Splits argument text into :class:`Token` objects.

    Instances hold no state between calls and may be shared across threads.
    """

    __slots__ = ()

    def tokenize(self, text: str) -> "list[Token]":
        """Tokenize ``text``.

        Args:
            text: Argument text of a stored procedure call.

        Raises:
            LexError: If a quoted literal is not terminated.

        Returns:
            Tokens in input order, always ending with one ``EOF`` token.
        """
        tokens: list[Token] = []
        state = LexerState.DEFAULT
        token_start = 0
        location = 0
        length = len(text)

        while location <= length:
            char = text[location] if location < length else _END

            if state is LexerState.DEFAULT:
                token_start = location
                location += 1
                if char == "'":
                    state = LexerState.QUOTED
                elif char == ",":
                    state = LexerState.COMMA
                elif char == "=":
                    state = LexerState.EQUALS
                elif char == _END:
                    state = LexerState.DEFAULT
                elif char.isspace():
                    state = LexerState.WHITESPACE
                else:
                    state = LexerState.TEXT

            elif state is LexerState.TEXT:
                if char in {"'", ",", "=", _END} or char.isspace():
                    # The terminating character is re-examined in DEFAULT.
                    tokens.append(Token(TokenType.TEXT, text[token_start:location], token_start))
                    state = LexerState.DEFAULT
                else:
                    location += 1

            elif state is LexerState.QUOTED:
                if char == "'":
                    location += 1
                    state = LexerState.QUOTED_POTENTIAL_END
                elif char == _END:
                    msg = "Unexpected end of input. Expecting a closing single quote."
                    raise LexError(msg, location, state)
                else:
                    location += 1

            elif state is LexerState.QUOTED_POTENTIAL_END:
                if char == "'":
                    # Doubled quote, the literal continues.
                    location += 1
                    state = LexerState.QUOTED
                else:
                    tokens.append(Token(TokenType.QUOTED, text[token_start:location], token_start))
                    state = LexerState.DEFAULT

            elif state is LexerState.WHITESPACE:
                if char != _END and char.isspace():
                    location += 1
                else:
                    tokens.append(Token(TokenType.WHITESPACE, text[token_start:location], token_start))
                    state = LexerState.DEFAULT

            elif state is LexerState.COMMA:
                tokens.append(Token(TokenType.COMMA, text[token_start : token_start + 1], token_start))
                state = LexerState.DEFAULT

            elif state is LexerState.EQUALS:
                tokens.append(Token(TokenType.EQUALS, text[token_start : token_start + 1], token_start))
                state = LexerState.DEFAULT

        tokens.append(Token(TokenType.EOF, EOF_VALUE, length))
        return tokens


_DEFAULT_LEXER: Final[Lexer] = Lexer()


def tokenize(text: str) -> "list[Token]":
    """Tokenize ``text`` with a shared :class:`Lexer`."""
    return _DEFAULT_LEXER.tokenize(text)
