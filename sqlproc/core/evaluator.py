"""Evaluation of literal slot values."""

import re
from typing import ClassVar, Final, Optional, Union

from typing_extensions import TypeAlias

from sqlproc.core.config import DEFAULT_CONFIG, ParserConfig
from sqlproc.exceptions import EvaluationError

__all__ = ("NULL", "LiteralValue", "NullType", "evaluate_literal", "is_variable_reference", "quote_literal")

_INTEGER_PATTERN: Final = re.compile(r"\d+", re.ASCII)
_FLOAT_PATTERN: Final = re.compile(r"\d*\.\d+", re.ASCII)
_MAX_INT64: Final = 2**63 - 1


class NullType:
    """Marker for a SQL ``NULL`` literal, distinct from ``None`` (no value)."""

    __slots__ = ()
    _instance: "ClassVar[Optional[NullType]]" = None

    def __new__(cls) -> "NullType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NULL"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "NULL"


NULL: Final[NullType] = NullType()

LiteralValue: TypeAlias = Union[str, int, float, NullType]


def evaluate_literal(raw_value: str) -> LiteralValue:
    """Convert the raw text of a slot value into a Python value.

    Tried in order: quoted string (doubled quotes unescaped), integer,
    decimal float, ``NULL`` (case-insensitive).

    Args:
        raw_value: Slot value exactly as it appeared in the call text.

    Raises:
        EvaluationError: If the value matches none of the literal kinds, or is an
            integer outside the signed 64-bit range.

    Returns:
        ``str``, ``int``, ``float`` or :data:`NULL`.
    """
    if len(raw_value) >= 2 and raw_value.startswith("'") and raw_value.endswith("'"):
        return raw_value[1:-1].replace("''", "'")
    if _INTEGER_PATTERN.fullmatch(raw_value):
        value = int(raw_value)
        if value > _MAX_INT64:
            raise EvaluationError(raw_value)
        return value
    if _FLOAT_PATTERN.fullmatch(raw_value):
        return float(raw_value)
    if raw_value.upper() == "NULL":
        return NULL
    raise EvaluationError(raw_value)


def quote_literal(value: str) -> str:
    """Render ``value`` as a single-quoted SQL string literal."""
    return "'" + value.replace("'", "''") + "'"


def is_variable_reference(value: str, config: Optional[ParserConfig] = None) -> bool:
    """Whether a slot value names a variable instead of holding a literal."""
    return (config or DEFAULT_CONFIG).is_variable_reference(value)
