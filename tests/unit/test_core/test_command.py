"""Tests for preparing calls and reading output values back."""

import pytest

from sqlproc.core.binder import ParameterDescriptor, ParameterDirection
from sqlproc.core.command import PreparedCall
from sqlproc.exceptions import BindingError, ParserError


@pytest.fixture
def declared() -> "list[ParameterDescriptor]":
    return [
        ParameterDescriptor("@RETURN_VALUE", 0, ParameterDirection.RETURN_VALUE),
        ParameterDescriptor("@Id", 1),
        ParameterDescriptor("@Name", 2, ParameterDirection.INPUT_OUTPUT),
        ParameterDescriptor("@Total", 3, ParameterDirection.OUTPUT),
    ]


def test_prepare_binds_values(declared: "list[ParameterDescriptor]") -> None:
    call = PreparedCall.prepare("EXEC @ret = dbo.GetUser 5, @Name = 'O''Brien', @Total = @t OUTPUT", declared)

    assert call.procedure_name == "dbo.GetUser"
    assert call.return_variable == "@ret"
    assert call.parameter_values() == {"@Id": 5, "@Name": "O'Brien"}
    assert call.binding.positional_parameters == (declared[1],)


def test_output_parameters_include_return_variable(declared: "list[ParameterDescriptor]") -> None:
    call = PreparedCall.prepare("EXEC @ret = dbo.GetUser @Id = @id, @Total = @t OUTPUT", declared)

    outputs = call.output_parameters()

    assert outputs == {"@t": declared[3], "@ret": declared[0]}


def test_read_outputs_by_variable(declared: "list[ParameterDescriptor]") -> None:
    call = PreparedCall.prepare("EXEC @ret = dbo.GetUser 1, @n OUTPUT, @t OUTPUT", declared)

    values = call.read_outputs({"@RETURN_VALUE": 0, "@Name": "Bob", "@Total": 12.5, "@Id": 1})

    assert values == {"@ret": 0, "@n": "Bob", "@t": 12.5}


def test_read_outputs_skips_missing_values(declared: "list[ParameterDescriptor]") -> None:
    call = PreparedCall.prepare("dbo.GetUser 1, 'x', @t OUTPUT", declared)

    assert call.read_outputs({}) == {}
    assert call.read_outputs({"@Total": 3}) == {"@t": 3}


def test_without_return_parameter_return_variable_is_ignored() -> None:
    call = PreparedCall.prepare("EXEC @ret = p @x OUTPUT", [ParameterDescriptor("@Out", 1, ParameterDirection.OUTPUT)])

    assert call.output_parameters() == {"@x": ParameterDescriptor("@Out", 1, ParameterDirection.OUTPUT)}


def test_prepare_propagates_errors(declared: "list[ParameterDescriptor]") -> None:
    with pytest.raises(ParserError):
        PreparedCall.prepare("EXEC dbo.GetUser 1 2", declared)
    with pytest.raises(BindingError):
        PreparedCall.prepare("EXEC dbo.GetUser 1, 2, 3, 4", declared)


def test_repr(declared: "list[ParameterDescriptor]") -> None:
    call = PreparedCall.prepare("dbo.GetUser 1", declared)

    assert repr(call) == "PreparedCall('EXEC dbo.GetUser 1')"
