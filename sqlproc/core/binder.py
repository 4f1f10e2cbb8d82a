"""Binding of parsed parameter slots to a procedure's declared parameters.

Named slots are matched first, by name, so that a caller writing
``@Name = value`` reserves that parameter wherever it appears. Positional
slots then take the remaining parameters in declared order, skipping the
return value. Slots are not modified; the result records which declared
parameter each slot (by index) was bound to.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Optional

from mypy_extensions import mypyc_attr

from sqlproc.core.config import DEFAULT_CONFIG, ParserConfig
from sqlproc.core.evaluator import LiteralValue, evaluate_literal
from sqlproc.exceptions import BindingError, BindingErrorKind
from sqlproc.utils.logging import call_fields, get_logger

if TYPE_CHECKING:
    from sqlproc.core.extractor import ParseResult
    from sqlproc.core.slots import ParameterSlot

__all__ = ("BindingResult", "ParameterDescriptor", "ParameterDirection", "bind")

logger = get_logger("core.binder")


class ParameterDirection(str, Enum):
    """Direction of a declared procedure parameter."""

    INPUT = "input"
    OUTPUT = "output"
    INPUT_OUTPUT = "input_output"
    RETURN_VALUE = "return_value"

    def __str__(self) -> str:
        return self.value


@mypyc_attr(allow_interpreted_subclasses=True)
class ParameterDescriptor:
    """Declared parameter metadata supplied by the caller.

    Usually discovered from the database catalog; treated as read-only here.
    """

    __slots__ = ("direction", "name", "position")

    def __init__(
        self, name: str, position: int, direction: ParameterDirection = ParameterDirection.INPUT
    ) -> None:
        self.name = name
        self.position = position
        self.direction = direction

    @property
    def is_return_value(self) -> bool:
        return self.direction is ParameterDirection.RETURN_VALUE

    @property
    def is_output(self) -> bool:
        """Whether a value flows back from this parameter after execution."""
        return self.direction is not ParameterDirection.INPUT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterDescriptor):
            return False
        return self.name == other.name and self.position == other.position and self.direction is other.direction

    def __hash__(self) -> int:
        return hash((self.name, self.position, self.direction))

    def __repr__(self) -> str:
        return f"ParameterDescriptor(name={self.name!r}, position={self.position!r}, direction={self.direction!r})"


@mypyc_attr(allow_interpreted_subclasses=True)
class BindingResult:
    """Outcome of binding a parsed call to its declared parameters.

    Attributes:
        positional_parameters: Parameters bound to positional slots, in slot order.
        named_parameters: Every declared parameter keyed by its own name.
        variable_parameters: Parameters whose slot value was a variable, keyed by that variable.
        slot_bindings: Bound parameter for each slot, index-aligned with the parsed slots.
        values: Evaluated literal for each parameter bound to a non-variable slot.
    """

    __slots__ = (
        "named_parameters",
        "parse_result",
        "positional_parameters",
        "slot_bindings",
        "values",
        "variable_parameters",
    )

    def __init__(
        self,
        parse_result: "ParseResult",
        positional_parameters: "Sequence[ParameterDescriptor]",
        named_parameters: "Mapping[str, ParameterDescriptor]",
        variable_parameters: "Mapping[str, ParameterDescriptor]",
        slot_bindings: "Sequence[ParameterDescriptor]",
        values: "Mapping[str, LiteralValue]",
    ) -> None:
        self.parse_result = parse_result
        self.positional_parameters: tuple[ParameterDescriptor, ...] = tuple(positional_parameters)
        self.named_parameters: Mapping[str, ParameterDescriptor] = MappingProxyType(dict(named_parameters))
        self.variable_parameters: Mapping[str, ParameterDescriptor] = MappingProxyType(dict(variable_parameters))
        self.slot_bindings: tuple[ParameterDescriptor, ...] = tuple(slot_bindings)
        self.values: Mapping[str, LiteralValue] = MappingProxyType(dict(values))

    def parameter_for(self, slot_index: int) -> ParameterDescriptor:
        """Declared parameter bound to the slot at ``slot_index``."""
        return self.slot_bindings[slot_index]

    def bound_slots(self) -> "list[tuple[ParameterSlot, ParameterDescriptor]]":
        return list(zip(self.parse_result.slots, self.slot_bindings))

    def __repr__(self) -> str:
        return (
            f"BindingResult(positional_parameters={list(self.positional_parameters)!r}, "
            f"variable_parameters={dict(self.variable_parameters)!r}, values={dict(self.values)!r})"
        )


def bind(
    result: "ParseResult",
    declared_parameters: "Sequence[ParameterDescriptor]",
    config: Optional[ParserConfig] = None,
) -> BindingResult:
    """Match parsed slots against the declared parameters of a procedure.

    Args:
        result: Parsed call.
        declared_parameters: Parameters in declared order, return value included.
        config: Parser configuration controlling name matching and variable detection.

    Raises:
        BindingError: If a named slot repeats or does not exist, or if there
            are more positional slots than free parameters.
        EvaluationError: If a literal slot value cannot be evaluated.

    Returns:
        The binding of every slot. Nothing is returned on failure.
    """
    parser_config = config or DEFAULT_CONFIG
    slots = result.slots

    by_name: dict[str, ParameterDescriptor] = {}
    for parameter in declared_parameters:
        by_name.setdefault(parser_config.normalize_name(parameter.name), parameter)

    used: set[int] = set()
    slot_bindings: list[Optional[ParameterDescriptor]] = [None] * len(slots)
    variables: dict[str, ParameterDescriptor] = {}
    values: dict[str, LiteralValue] = {}

    def assign(index: int, parameter: ParameterDescriptor) -> None:
        slot = slots[index]
        slot_bindings[index] = parameter
        used.add(id(parameter))
        if parser_config.is_variable_reference(slot.value):
            variables[slot.value] = parameter
        else:
            values[parameter.name] = evaluate_literal(slot.value)

    named_indexes = [i for i, slot in enumerate(slots) if slot.is_named]
    positional_indexes = [i for i, slot in enumerate(slots) if not slot.is_named]

    for index in named_indexes:
        slot_name = slots[index].name or ""
        parameter = by_name.get(parser_config.normalize_name(slot_name))
        if parameter is None:
            msg = f"Parameter with name {slot_name!r} was not found in the stored procedure"
            raise BindingError(msg, BindingErrorKind.UNKNOWN_NAME, slot_name)
        if id(parameter) in used:
            msg = f"Parameter with name {slot_name!r} is already specified"
            raise BindingError(msg, BindingErrorKind.DUPLICATE_NAME, slot_name)
        assign(index, parameter)

    positional: list[ParameterDescriptor] = []
    cursor = 0
    for index in positional_indexes:
        while True:
            if cursor >= len(declared_parameters):
                msg = "More parameters are specified than the stored procedure has parameters"
                raise BindingError(msg, BindingErrorKind.INSUFFICIENT_PARAMETERS, slots[index].value)
            parameter = declared_parameters[cursor]
            cursor += 1
            if parameter.is_return_value or id(parameter) in used:
                continue
            break
        assign(index, parameter)
        positional.append(parameter)

    named = {parameter.name: parameter for parameter in declared_parameters}

    logger.debug(
        "Bound %d slot(s) of %s to %d declared parameter(s)",
        len(slots),
        result.procedure_name,
        len(declared_parameters),
        extra=call_fields(
            result.procedure_name,
            result.return_variable,
            slot_count=len(slots),
            parameter_count=len(declared_parameters),
        ),
    )
    return BindingResult(
        result,
        positional_parameters=positional,
        named_parameters=named,
        variable_parameters=variables,
        slot_bindings=[parameter for parameter in slot_bindings if parameter is not None],
        values=values,
    )
