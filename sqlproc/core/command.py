"""Bridge between a bound call and the command object that executes it.

:class:`PreparedCall` runs the whole pipeline for one call text and exposes
what the surrounding query layer needs: the values to set on the command's
parameters before execution, and a way to read output values back under the
variable names the caller used in the call text.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from mypy_extensions import mypyc_attr

from sqlproc.core.binder import BindingResult, ParameterDescriptor, bind
from sqlproc.core.config import DEFAULT_CONFIG, ParserConfig
from sqlproc.core.evaluator import LiteralValue
from sqlproc.core.extractor import ParseResult, StoredProcedureParser
from sqlproc.utils.logging import get_logger

__all__ = ("PreparedCall",)

logger = get_logger("core.command")


@mypyc_attr(allow_interpreted_subclasses=True)
class PreparedCall:
    """A stored procedure call parsed and bound to its declared parameters."""

    __slots__ = ("_binding", "_declared_parameters", "_parse_result")

    def __init__(
        self,
        parse_result: ParseResult,
        binding: BindingResult,
        declared_parameters: "Sequence[ParameterDescriptor]",
    ) -> None:
        self._parse_result = parse_result
        self._binding = binding
        self._declared_parameters = tuple(declared_parameters)

    @classmethod
    def prepare(
        cls,
        call_text: str,
        declared_parameters: "Sequence[ParameterDescriptor]",
        config: Optional[ParserConfig] = None,
    ) -> "PreparedCall":
        """Parse ``call_text`` and bind it to ``declared_parameters``.

        Raises:
            SQLProcParsingError: If no procedure name is present.
            LexError: If a quoted literal is not terminated.
            ParserError: If the argument list is malformed.
            BindingError: If the slots do not fit the declared parameters.
            EvaluationError: If a literal value cannot be evaluated.
        """
        config = config or DEFAULT_CONFIG
        parse_result = StoredProcedureParser(config).parse(call_text)
        binding = bind(parse_result, declared_parameters, config=config)
        return cls(parse_result, binding, declared_parameters)

    @property
    def parse_result(self) -> ParseResult:
        return self._parse_result

    @property
    def binding(self) -> BindingResult:
        return self._binding

    @property
    def procedure_name(self) -> str:
        return self._parse_result.procedure_name

    @property
    def return_variable(self) -> Optional[str]:
        return self._parse_result.return_variable

    def parameter_values(self) -> "dict[str, LiteralValue]":
        """Values to assign before execution, keyed by declared parameter name."""
        return dict(self._binding.values)

    def output_parameters(self) -> "dict[str, ParameterDescriptor]":
        """Output-capable parameters referenced by a variable, keyed by that variable."""
        outputs = {
            variable: parameter
            for variable, parameter in self._binding.variable_parameters.items()
            if parameter.is_output
        }
        if self.return_variable:
            return_parameter = self._return_parameter()
            if return_parameter is not None:
                outputs[self.return_variable] = return_parameter
        return outputs

    def read_outputs(self, returned: "Mapping[str, Any]") -> "dict[str, Any]":
        """Map values read back from the executed command to caller variables.

        Args:
            returned: Values after execution, keyed by declared parameter name.

        Returns:
            Values keyed by the variable names used in the call text. Parameters
            missing from ``returned`` are left out.
        """
        values: dict[str, Any] = {}
        for variable, parameter in self.output_parameters().items():
            if parameter.name in returned:
                values[variable] = returned[parameter.name]
            else:
                logger.debug("No value returned for %s (bound to %s)", parameter.name, variable)
        return values

    def _return_parameter(self) -> Optional[ParameterDescriptor]:
        for parameter in self._declared_parameters:
            if parameter.is_return_value:
                return parameter
        return None

    def __repr__(self) -> str:
        return f"PreparedCall({str(self._parse_result)!r})"
