"""Groups argument tokens into positional and named parameter slots.

A slot is one comma-delimited argument::

    @return = Dummy_sp NULL, {@Value}, @p3 = @Other OUTPUT
                       |-A|  |--B---|  |------C-----------|

    A: positional slot with value "NULL"
    B: positional slot with value "{@Value}"
    C: named output slot with name "@p3" and value "@Other"

Whether a slot is positional or named is only known once an ``=`` is seen,
so the first value is captured provisionally and re-labelled as the name
when the equals sign follows. ``OUT``/``OUTPUT`` is only a keyword when it
is separated from the value by whitespace (``@x OUTPUT`` is legal,
``@xOUTPUT`` is a single text token and is rejected).
"""

from collections.abc import Iterable
from enum import Enum
from typing import Final, Optional, Union

from mypy_extensions import mypyc_attr

from sqlproc.core.config import DEFAULT_CONFIG, ParserConfig
from sqlproc.core.lexer import Lexer, Token, TokenType
from sqlproc.exceptions import ParserError
from sqlproc.utils.logging import get_logger

__all__ = ("ParameterSlot", "ParserState", "SlotParser", "SlotType", "parse_slots")

logger = get_logger("core.slots")

SLOT_SLOTS = ("is_output", "name", "type", "value")

_VALUE_TOKENS: Final = frozenset({TokenType.TEXT, TokenType.QUOTED})
_SLOT_TERMINATORS: Final = frozenset({TokenType.COMMA, TokenType.EOF})


class SlotType(str, Enum):
    """How a slot is matched against the declared parameters."""

    POSITIONAL = "positional"
    NAMED = "named"

    def __str__(self) -> str:
        return self.value


class ParserState(Enum):
    """States of the slot parser. ``START`` is the only legal final state."""

    START = "START"
    POSITIONAL = "POSITIONAL"
    POSITIONAL_OUTPUT = "POSITIONAL_OUTPUT"
    EXPECT_VALUE_FOR_NAMED = "EXPECT_VALUE_FOR_NAMED"
    NAMED = "NAMED"
    NAMED_OUTPUT = "NAMED_OUTPUT"


@mypyc_attr(allow_interpreted_subclasses=True)
class ParameterSlot:
    """One argument of a stored procedure call."""

    __slots__ = SLOT_SLOTS

    def __init__(
        self,
        type: SlotType,  # noqa: A002
        value: str,
        name: Optional[str] = None,
        is_output: bool = False,
    ) -> None:
        self.type = type
        self.value = value
        self.name = name
        self.is_output = is_output

    @classmethod
    def positional(cls, value: str, is_output: bool = False) -> "ParameterSlot":
        return cls(SlotType.POSITIONAL, value, is_output=is_output)

    @classmethod
    def named(cls, name: str, value: str, is_output: bool = False) -> "ParameterSlot":
        return cls(SlotType.NAMED, value, name=name, is_output=is_output)

    @property
    def is_named(self) -> bool:
        return self.type is SlotType.NAMED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSlot):
            return False
        return (
            self.type is other.type
            and self.name == other.name
            and self.value == other.value
            and self.is_output == other.is_output
        )

    def __hash__(self) -> int:
        return hash((self.type, self.name, self.value, self.is_output))

    def __str__(self) -> str:
        text = f"{self.name} = {self.value}" if self.is_named else self.value
        return f"{text} OUTPUT" if self.is_output else text

    def __repr__(self) -> str:
        if self.is_named:
            return f"ParameterSlot.named({self.name!r}, {self.value!r}, is_output={self.is_output!r})"
        return f"ParameterSlot.positional({self.value!r}, is_output={self.is_output!r})"


def _unexpected(token: Token, state: ParserState) -> ParserError:
    return ParserError(f"Error in parsing: unexpected {token.value!r}", token, state)


@mypyc_attr(allow_interpreted_subclasses=True)
class SlotParser:
    """Parses argument text (or its tokens) into :class:`ParameterSlot` objects."""

    __slots__ = ("_config", "_lexer")

    def __init__(self, config: Optional[ParserConfig] = None, lexer: Optional[Lexer] = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._lexer = lexer or Lexer()

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def lexer(self) -> Lexer:
        return self._lexer

    def parse(self, text: str) -> "list[ParameterSlot]":
        """Tokenize and parse argument text.

        The stored procedure name must already be removed from ``text``.

        Raises:
            LexError: If a quoted literal is not terminated.
            ParserError: On an unexpected token. The error carries ``text``
                so its message points at the offending token.
        """
        try:
            return self.parse_tokens(self._lexer.tokenize(text))
        except ParserError as exc:
            exc.input = text
            raise

    def parse_tokens(self, tokens: "Iterable[Token]") -> "list[ParameterSlot]":
        """Run the slot state machine over ``tokens``.

        Every token advances the machine; a comma or end-of-input closes the
        current slot and returns to ``START``.
        """
        slots: list[ParameterSlot] = []
        state = ParserState.START
        name = ""
        value = ""
        # Set once the current value is followed by whitespace, so that only
        # "@value OUTPUT" (and not "@valueOUTPUT") is accepted.
        has_trailing_whitespace = False
        last_token: Optional[Token] = None

        for token in tokens:
            last_token = token
            kind = token.type

            if state is ParserState.START:
                has_trailing_whitespace = False
                if kind in {TokenType.WHITESPACE, TokenType.EOF}:
                    continue
                if kind in _VALUE_TOKENS:
                    value = token.value
                    state = ParserState.POSITIONAL
                    continue
                raise _unexpected(token, state)

            if state is ParserState.POSITIONAL:
                if kind is TokenType.WHITESPACE:
                    has_trailing_whitespace = True
                elif kind in _SLOT_TERMINATORS:
                    slots.append(ParameterSlot.positional(value))
                    state = ParserState.START
                elif kind is TokenType.EQUALS:
                    has_trailing_whitespace = False
                    name = value
                    state = ParserState.EXPECT_VALUE_FOR_NAMED
                elif kind is TokenType.TEXT and has_trailing_whitespace and self._config.is_output_keyword(token.value):
                    state = ParserState.POSITIONAL_OUTPUT
                else:
                    raise _unexpected(token, state)
                continue

            if state is ParserState.POSITIONAL_OUTPUT:
                if kind is TokenType.WHITESPACE:
                    has_trailing_whitespace = True
                elif kind in _SLOT_TERMINATORS:
                    slots.append(ParameterSlot.positional(value, is_output=True))
                    state = ParserState.START
                else:
                    raise _unexpected(token, state)
                continue

            if state is ParserState.EXPECT_VALUE_FOR_NAMED:
                if kind is TokenType.WHITESPACE:
                    continue
                if kind in _VALUE_TOKENS:
                    has_trailing_whitespace = False
                    value = token.value
                    state = ParserState.NAMED
                    continue
                raise _unexpected(token, state)

            if state is ParserState.NAMED:
                if kind is TokenType.WHITESPACE:
                    has_trailing_whitespace = True
                elif kind in _SLOT_TERMINATORS:
                    slots.append(ParameterSlot.named(name, value))
                    state = ParserState.START
                elif kind is TokenType.TEXT and has_trailing_whitespace and self._config.is_output_keyword(token.value):
                    state = ParserState.NAMED_OUTPUT
                else:
                    raise _unexpected(token, state)
                continue

            if state is ParserState.NAMED_OUTPUT:
                if kind is TokenType.WHITESPACE:
                    has_trailing_whitespace = True
                elif kind in _SLOT_TERMINATORS:
                    slots.append(ParameterSlot.named(name, value, is_output=True))
                    state = ParserState.START
                else:
                    raise _unexpected(token, state)

        if state is not ParserState.START:
            if last_token is None:
                last_token = Token(TokenType.EOF, "", 0)
            msg = "Error in parsing: unexpected end of input"
            raise ParserError(msg, last_token, state)

        logger.debug("Parsed %d parameter slot(s)", len(slots))
        return slots


_DEFAULT_SLOT_PARSER: Final[SlotParser] = SlotParser()


def parse_slots(source: "Union[str, Iterable[Token]]", config: Optional[ParserConfig] = None) -> "list[ParameterSlot]":
    """Parse argument text or a token sequence into parameter slots.

    Args:
        source: Argument text, or tokens already produced by the lexer.
        config: Parser configuration. Defaults to :data:`DEFAULT_CONFIG`.

    Returns:
        Slots in call order.
    """
    parser = _DEFAULT_SLOT_PARSER if config is None else SlotParser(config)
    if isinstance(source, str):
        return parser.parse(source)
    return parser.parse_tokens(source)
