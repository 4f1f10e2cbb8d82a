"""Splitting of a stored procedure call into name, return variable and arguments.

Accepts the text a database tool generates for "execute stored procedure",
for example::

    EXEC @return_value = [dbo].[Get User] @Id = 5, @Name = 'x' OUTPUT

The leading ``EXEC`` keyword and the ``=`` after the return variable are
optional. Bracket-quoted names may contain spaces.
"""

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Final, Optional

from mypy_extensions import mypyc_attr

from sqlproc.core.binder import BindingResult, bind
from sqlproc.core.config import DEFAULT_CONFIG, ParserConfig
from sqlproc.core.names import ProcedureName, qualify_procedure_name
from sqlproc.core.slots import ParameterSlot, SlotParser
from sqlproc.exceptions import SQLProcParsingError
from sqlproc.utils.logging import call_fields, get_logger

if TYPE_CHECKING:
    from sqlproc.core.binder import ParameterDescriptor

__all__ = ("ParseResult", "StoredProcedureParser", "parse_call")

logger = get_logger("core.extractor")


@mypyc_attr(allow_interpreted_subclasses=True)
class ParseResult:
    """A parsed stored procedure call."""

    __slots__ = ("_config", "procedure_name", "return_variable", "slots")

    def __init__(
        self,
        procedure_name: str,
        return_variable: Optional[str],
        slots: "Sequence[ParameterSlot]",
        config: Optional[ParserConfig] = None,
    ) -> None:
        self.procedure_name = procedure_name
        self.return_variable = return_variable
        self.slots: tuple[ParameterSlot, ...] = tuple(slots)
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def qualified_name(self) -> ProcedureName:
        """The procedure name split into catalog, schema and name."""
        return qualify_procedure_name(self.procedure_name, dialect=self._config.dialect)

    def bind(self, declared_parameters: "Sequence[ParameterDescriptor]") -> BindingResult:
        """Bind the slots of this call to ``declared_parameters``."""
        return bind(self, declared_parameters, config=self._config)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseResult):
            return False
        return (
            self.procedure_name == other.procedure_name
            and self.return_variable == other.return_variable
            and self.slots == other.slots
        )

    def __hash__(self) -> int:
        return hash((self.procedure_name, self.return_variable, self.slots))

    def __str__(self) -> str:
        head = f"EXEC {self.procedure_name}"
        if self.return_variable:
            head = f"EXEC {self.return_variable} = {self.procedure_name}"
        if not self.slots:
            return head
        return f"{head} {', '.join(str(slot) for slot in self.slots)}"

    def __repr__(self) -> str:
        return (
            f"ParseResult(procedure_name={self.procedure_name!r}, "
            f"return_variable={self.return_variable!r}, slots={list(self.slots)!r})"
        )


def _is_name_complete(name: str) -> bool:
    """Whether every ``[`` in the accumulated name has been closed."""
    open_bracket = name.rfind("[")
    if open_bracket < 0:
        return True
    return open_bracket < name.rfind("]")


def _find_name_end(call_text: str, name_words: "list[str]") -> int:
    """Offset just past the first occurrence of the procedure name in ``call_text``.

    Words are matched separated by any run of whitespace, so a bracketed name
    written with tabs or repeated spaces is still located.
    """
    pattern = r"\s+".join(re.escape(word) for word in name_words)
    match = re.search(pattern, call_text)
    if match is None:
        msg = f"Procedure name {' '.join(name_words)!r} not found in call text"
        raise SQLProcParsingError(msg)
    return match.end()


@mypyc_attr(allow_interpreted_subclasses=True)
class StoredProcedureParser:
    """Parses stored procedure call texts into :class:`ParseResult` objects.

    Stateless apart from its configuration; safe to share across threads.
    """

    __slots__ = ("_config", "_slot_parser")

    def __init__(self, config: Optional[ParserConfig] = None, slot_parser: Optional[SlotParser] = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._slot_parser = slot_parser or SlotParser(self._config)

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def slot_parser(self) -> SlotParser:
        return self._slot_parser

    def split_call(self, call_text: str) -> "tuple[Optional[str], str, str]":
        """Split ``call_text`` into return variable, procedure name and argument text.

        Raises:
            SQLProcParsingError: If no procedure name is present.
        """
        return_variable: Optional[str] = None
        name_words: list[str] = []

        for word in call_text.split():
            if not name_words:
                if word.lower() in self._config.exec_keywords or word == "=":
                    continue
                if word.startswith(self._config.return_variable_prefixes):
                    return_variable = word
                    continue
            name_words.append(word)
            if _is_name_complete(" ".join(name_words)):
                break

        if not name_words:
            msg = f"No stored procedure name found in {call_text!r}"
            raise SQLProcParsingError(msg)

        # First textual occurrence; a name repeated earlier inside a literal is not guarded against.
        arguments = call_text[_find_name_end(call_text, name_words) :]
        return return_variable, " ".join(name_words).strip(), arguments

    def parse(self, call_text: str) -> ParseResult:
        """Parse a full stored procedure call.

        Args:
            call_text: Call text, optionally starting with ``EXEC`` and a return variable.

        Raises:
            SQLProcParsingError: If no procedure name is present.
            LexError: If a quoted literal is not terminated.
            ParserError: If the argument list is malformed.

        Returns:
            The procedure name, return variable and parameter slots.
        """
        return_variable, procedure_name, arguments = self.split_call(call_text)
        slots = self._slot_parser.parse(arguments)
        logger.debug(
            "Parsed call to %s with %d slot(s)",
            procedure_name,
            len(slots),
            extra=call_fields(procedure_name, return_variable, slot_count=len(slots)),
        )
        return ParseResult(procedure_name, return_variable, slots, config=self._config)


_DEFAULT_PARSER: Final[StoredProcedureParser] = StoredProcedureParser()


def parse_call(call_text: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """Parse ``call_text`` with the default or the given configuration."""
    parser = _DEFAULT_PARSER if config is None else StoredProcedureParser(config)
    return parser.parse(call_text)
