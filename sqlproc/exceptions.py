from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from sqlproc.core.lexer import LexerState, Token
    from sqlproc.core.slots import ParserState

__all__ = (
    "BindingError",
    "BindingErrorKind",
    "EvaluationError",
    "LexError",
    "ParserError",
    "SQLProcError",
    "SQLProcParsingError",
)


class SQLProcError(Exception):
    """Base exception class from which all sqlproc exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLProcError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class SQLProcParsingError(SQLProcError):
    """Issues splitting a call text into procedure name and arguments."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues parsing stored procedure call."
        super().__init__(message)


class LexError(SQLProcError):
    """Raised by the lexer when the argument text cannot be tokenized.

    The only lexical failure is an unterminated quoted literal.
    """

    def __init__(self, message: str, position: int, state: "LexerState") -> None:
        super().__init__(message)
        self.position = position
        self.state = state


class ParserError(SQLProcError):
    """Unexpected token while grouping tokens into parameter slots.

    When ``input`` is attached, the message also shows the argument text with
    the offending token bracketed by ``»`` and ``«``.
    """

    def __init__(
        self, message: str, token: "Token", state: "ParserState", input: Optional[str] = None  # noqa: A002
    ) -> None:
        super().__init__(message)
        self.token = token
        self.state = state
        self.input = input

    def __str__(self) -> str:
        message = super().__str__()
        if not self.input:
            return message
        start = self.token.position
        end = start + len(self.token.value)
        return (
            f"{message} at position {start} (bracketed with » and « below)\n"
            f"{self.input[:start]}»{self.token.value}«{self.input[end:]}"
        )


class BindingErrorKind(str, Enum):
    """Reasons a parsed call cannot be bound to the declared parameters."""

    DUPLICATE_NAME = "duplicate_name"
    UNKNOWN_NAME = "unknown_name"
    INSUFFICIENT_PARAMETERS = "insufficient_parameters"

    def __str__(self) -> str:
        return self.value


class BindingError(SQLProcError):
    """Parsed slots do not match the declared parameter list."""

    def __init__(self, message: str, kind: BindingErrorKind, parameter_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.parameter_name = parameter_name


class EvaluationError(SQLProcError):
    """A raw slot value is not a string, integer, float or NULL literal."""

    def __init__(self, raw_value: str) -> None:
        super().__init__(f"Could not convert string to a value: {raw_value!r}")
        self.raw_value = raw_value
