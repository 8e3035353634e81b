"""Tests for argument extraction and validation."""

import pytest

from awsdac_mcp_server.core.exceptions import (
    InvalidArgumentTypeError,
    MissingArgumentError,
    ToolError,
)
from awsdac_mcp_server.core.tool_system import (
    ParameterSpec,
    ParameterType,
    ToolDescriptor,
    extract_argument,
    truncate_to_int,
    validate_arguments,
)

DESCRIPTOR = ToolDescriptor(
    name="sample",
    description="Sample tool",
    parameters=[
        ParameterSpec(name="yamlContent", type=ParameterType.STRING, required=True),
        ParameterSpec(name="scale", type=ParameterType.NUMBER),
        ParameterSpec(name="verbose", type=ParameterType.BOOLEAN),
    ],
)


def test_required_string_present():
    """Test a required string is returned unchanged."""
    spec = DESCRIPTOR.parameters[0]
    assert extract_argument({"yamlContent": "Diagram: {}"}, spec) == "Diagram: {}"


def test_required_missing():
    """Test a missing required argument names the parameter."""
    with pytest.raises(MissingArgumentError) as exc_info:
        extract_argument({}, DESCRIPTOR.parameters[0])
    assert "yamlContent" in str(exc_info.value)


def test_required_null_counts_as_missing():
    """Test a JSON null is treated as absent."""
    with pytest.raises(MissingArgumentError):
        extract_argument({"yamlContent": None}, DESCRIPTOR.parameters[0])


def test_key_matching_is_case_sensitive():
    """Test differently cased keys do not satisfy a parameter."""
    with pytest.raises(MissingArgumentError):
        validate_arguments({"yamlcontent": "Diagram: {}"}, DESCRIPTOR)
    with pytest.raises(MissingArgumentError):
        validate_arguments({"YamlContent": "Diagram: {}"}, DESCRIPTOR)


def test_wrong_type():
    """Test a present argument of the wrong type is rejected."""
    with pytest.raises(InvalidArgumentTypeError) as exc_info:
        extract_argument({"yamlContent": 42}, DESCRIPTOR.parameters[0])
    assert "expected string" in str(exc_info.value)


def test_optional_absent_returns_none():
    """Test an absent optional argument is reported as None."""
    assert extract_argument({"yamlContent": "x"}, DESCRIPTOR.parameters[1]) is None


def test_number_accepts_int_and_float():
    """Test numbers accept both integer and fractional values."""
    spec = DESCRIPTOR.parameters[1]
    assert extract_argument({"scale": 2}, spec) == 2
    assert extract_argument({"scale": 2.5}, spec) == 2.5


def test_number_rejects_bool_and_string():
    """Test booleans and numeric strings are not numbers."""
    spec = DESCRIPTOR.parameters[1]
    with pytest.raises(InvalidArgumentTypeError):
        extract_argument({"scale": True}, spec)
    with pytest.raises(InvalidArgumentTypeError):
        extract_argument({"scale": "2"}, spec)


def test_boolean_rejects_number():
    """Test 0/1 are not accepted as booleans."""
    with pytest.raises(InvalidArgumentTypeError):
        extract_argument({"verbose": 1}, DESCRIPTOR.parameters[2])
    assert extract_argument({"verbose": False}, DESCRIPTOR.parameters[2]) is False


def test_validate_drops_unknown_keys():
    """Test undeclared keys are ignored rather than rejected."""
    validated = validate_arguments(
        {"yamlContent": "x", "verbose": True, "extra": "ignored"},
        DESCRIPTOR,
    )
    assert validated == {"yamlContent": "x", "verbose": True}


def test_validate_handles_missing_bag():
    """Test a missing argument bag is treated as empty."""
    optional_only = ToolDescriptor(name="guide", description="No arguments")
    assert validate_arguments(None, optional_only) == {}


def test_argument_errors_are_tool_errors():
    """Test argument errors raised by a handler are reported, not recovered."""
    assert issubclass(MissingArgumentError, ToolError)
    assert issubclass(InvalidArgumentTypeError, ToolError)


def test_truncate_to_int():
    """Test truncation toward zero."""
    assert truncate_to_int(3.9) == 3
    assert truncate_to_int(-3.9) == -3
    assert truncate_to_int(7) == 7
    with pytest.raises(ValueError):
        truncate_to_int(float("inf"))
