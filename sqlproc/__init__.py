"""sqlproc: parse and bind stored procedure call texts."""

from sqlproc import core, exceptions, utils
from sqlproc.__metadata__ import __version__
from sqlproc.core import (
    DEFAULT_CONFIG,
    NULL,
    BindingResult,
    ParameterDescriptor,
    ParameterDirection,
    ParameterSlot,
    ParseResult,
    ParserConfig,
    PreparedCall,
    ProcedureName,
    SlotType,
    StoredProcedureParser,
    Token,
    TokenType,
    bind,
    evaluate_literal,
    parse_call,
    parse_slots,
    tokenize,
)
from sqlproc.exceptions import (
    BindingError,
    BindingErrorKind,
    EvaluationError,
    LexError,
    ParserError,
    SQLProcError,
    SQLProcParsingError,
)

__all__ = (
    "DEFAULT_CONFIG",
    "NULL",
    "BindingError",
    "BindingErrorKind",
    "BindingResult",
    "EvaluationError",
    "LexError",
    "ParameterDescriptor",
    "ParameterDirection",
    "ParameterSlot",
    "ParseResult",
    "ParserConfig",
    "ParserError",
    "PreparedCall",
    "ProcedureName",
    "SQLProcError",
    "SQLProcParsingError",
    "SlotType",
    "StoredProcedureParser",
    "Token",
    "TokenType",
    "__version__",
    "bind",
    "core",
    "evaluate_literal",
    "exceptions",
    "parse_call",
    "parse_slots",
    "tokenize",
    "utils",
)
