"""Parser configuration for stored procedure call texts."""

from collections.abc import Iterable
from typing import Any, Final, Optional

__all__ = ("DEFAULT_CONFIG", "ParserConfig")


class ParserConfig:
    """Declarative configuration for the call-text pipeline."""

    __slots__ = (
        "dialect",
        "exec_keywords",
        "match_names_loosely",
        "output_keywords",
        "return_variable_prefixes",
        "variable_prefixes",
    )

    def __init__(
        self,
        variable_prefixes: Optional[Iterable[str]] = None,
        return_variable_prefixes: Optional[Iterable[str]] = None,
        exec_keywords: Optional[Iterable[str]] = None,
        output_keywords: Optional[Iterable[str]] = None,
        match_names_loosely: bool = True,
        dialect: str = "tsql",
    ) -> None:
        """Initialize parser configuration.

        Args:
            variable_prefixes: Prefixes marking a slot value as a variable reference
            return_variable_prefixes: Prefixes marking a word before the procedure name as the return variable
            exec_keywords: Leading keywords skipped before the procedure name (compared case-insensitively)
            output_keywords: Keywords flagging a slot as OUTPUT (compared case-insensitively)
            match_names_loosely: Match named slots ignoring case and the leading variable prefix
            dialect: sqlglot dialect used to qualify procedure names
        """
        if variable_prefixes is None:
            variable_prefixes = ("@",)
        if return_variable_prefixes is None:
            return_variable_prefixes = ("@", "{@")
        if exec_keywords is None:
            exec_keywords = ("exec", "execute")
        if output_keywords is None:
            output_keywords = ("OUT", "OUTPUT")
        self.variable_prefixes = tuple(variable_prefixes)
        self.return_variable_prefixes = tuple(return_variable_prefixes)
        self.exec_keywords = frozenset(kw.lower() for kw in exec_keywords)
        self.output_keywords = frozenset(kw.upper() for kw in output_keywords)
        self.match_names_loosely = match_names_loosely
        self.dialect = dialect

    def replace(self, **changes: Any) -> "ParserConfig":
        """Return a copy of this config with ``changes`` applied."""
        params: dict[str, Any] = {
            "variable_prefixes": self.variable_prefixes,
            "return_variable_prefixes": self.return_variable_prefixes,
            "exec_keywords": self.exec_keywords,
            "output_keywords": self.output_keywords,
            "match_names_loosely": self.match_names_loosely,
            "dialect": self.dialect,
        }
        unknown = set(changes) - set(params)
        if unknown:
            msg = f"Unknown ParserConfig option(s): {', '.join(sorted(unknown))}"
            raise TypeError(msg)
        params.update(changes)
        return ParserConfig(**params)

    def is_variable_reference(self, value: str) -> bool:
        return value.startswith(self.variable_prefixes)

    def is_output_keyword(self, value: str) -> bool:
        return value.upper() in self.output_keywords

    def normalize_name(self, name: str) -> str:
        """Key used to match a slot name against declared parameter names."""
        if not self.match_names_loosely:
            return name
        for prefix in self.variable_prefixes:
            if name.startswith(prefix):
                name = name[len(prefix) :]
                break
        return name.casefold()

    def _identity(self) -> "tuple[Any, ...]":
        return (
            self.variable_prefixes,
            self.return_variable_prefixes,
            tuple(sorted(self.exec_keywords)),
            tuple(sorted(self.output_keywords)),
            self.match_names_loosely,
            self.dialect,
        )

    def hash(self) -> int:
        """Generate a deterministic hash of this configuration."""
        return hash(self._identity())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParserConfig):
            return False
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return self.hash()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(variable_prefixes={self.variable_prefixes!r}, "
            f"return_variable_prefixes={self.return_variable_prefixes!r}, "
            f"exec_keywords={sorted(self.exec_keywords)!r}, output_keywords={sorted(self.output_keywords)!r}, "
            f"match_names_loosely={self.match_names_loosely!r}, dialect={self.dialect!r})"
        )


DEFAULT_CONFIG: Final[ParserConfig] = ParserConfig()
