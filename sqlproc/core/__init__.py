"""Stored procedure call parsing and parameter binding."""

from sqlproc.core.binder import BindingResult, ParameterDescriptor, ParameterDirection, bind
from sqlproc.core.command import PreparedCall
from sqlproc.core.config import DEFAULT_CONFIG, ParserConfig
from sqlproc.core.evaluator import NULL, LiteralValue, NullType, evaluate_literal, is_variable_reference, quote_literal
from sqlproc.core.extractor import ParseResult, StoredProcedureParser, parse_call
from sqlproc.core.lexer import EOF_VALUE, Lexer, LexerState, Token, TokenType, tokenize
from sqlproc.core.names import ProcedureName, qualify_procedure_name
from sqlproc.core.slots import ParameterSlot, ParserState, SlotParser, SlotType, parse_slots

__all__ = (
    "DEFAULT_CONFIG",
    "EOF_VALUE",
    "NULL",
    "BindingResult",
    "Lexer",
    "LexerState",
    "LiteralValue",
    "NullType",
    "ParameterDescriptor",
    "ParameterDirection",
    "ParameterSlot",
    "ParseResult",
    "ParserConfig",
    "ParserState",
    "PreparedCall",
    "ProcedureName",
    "SlotParser",
    "SlotType",
    "StoredProcedureParser",
    "Token",
    "TokenType",
    "bind",
    "evaluate_literal",
    "is_variable_reference",
    "parse_call",
    "parse_slots",
    "qualify_procedure_name",
    "quote_literal",
    "tokenize",
)
