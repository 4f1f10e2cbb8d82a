"""Qualification of stored procedure names using sqlglot."""

from typing import Optional

from sqlglot import exp
from sqlglot.errors import SqlglotError

from sqlproc.exceptions import SQLProcParsingError

__all__ = ("ProcedureName", "qualify_procedure_name")


class ProcedureName:
    """A procedure name split into unquoted catalog, schema and name parts."""

    __slots__ = ("catalog", "name", "schema")

    def __init__(self, name: str, schema: Optional[str] = None, catalog: Optional[str] = None) -> None:
        self.name = name
        self.schema = schema
        self.catalog = catalog

    @property
    def parts(self) -> "tuple[str, ...]":
        return tuple(part for part in (self.catalog, self.schema, self.name) if part)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProcedureName):
            return False
        return self.parts == other.parts

    def __hash__(self) -> int:
        return hash(self.parts)

    def __str__(self) -> str:
        return ".".join(self.parts)

    def __repr__(self) -> str:
        return f"ProcedureName(name={self.name!r}, schema={self.schema!r}, catalog={self.catalog!r})"


def qualify_procedure_name(procedure_name: str, dialect: str = "tsql") -> ProcedureName:
    """Split a possibly quoted, dotted procedure name into its parts.

    Args:
        procedure_name: Name as written in the call text, e.g. ``[dbo].[Get User]``.
        dialect: sqlglot dialect that decides identifier quoting rules.

    Raises:
        SQLProcParsingError: If sqlglot cannot read the name as an identifier path.

    Returns:
        The qualified name with quoting removed.
    """
    try:
        table = exp.to_table(procedure_name, dialect=dialect)
    except SqlglotError as e:
        msg = f"Procedure name {procedure_name!r} could not be parsed: {e}"
        raise SQLProcParsingError(msg) from e
    if not table.name:
        msg = f"Procedure name {procedure_name!r} could not be parsed"
        raise SQLProcParsingError(msg)
    return ProcedureName(table.name, schema=table.db or None, catalog=table.catalog or None)
