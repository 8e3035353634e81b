"""Argument extraction and validation.

The argument bag of a tools/call is untyped JSON. It is checked once,
at the dispatch boundary, against the tool's declared parameters; handlers
only ever see the validated copy.

Keys are matched exactly and case-sensitively. Keys the descriptor does
not declare are dropped, not rejected, so newer callers keep working
against older tool schemas.
"""

import math
from typing import Any, Dict, Mapping, Optional

from ..exceptions import InvalidArgumentTypeError, MissingArgumentError
from .tool_interface import ParameterSpec, ParameterType, ToolDescriptor


def _matches(value: Any, expected: ParameterType) -> bool:
    if expected is ParameterType.STRING:
        return isinstance(value, str)
    if expected is ParameterType.BOOLEAN:
        return isinstance(value, bool)
    if expected is ParameterType.NUMBER:
        # bool is an int subclass but never a number on the wire
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return False


def extract_argument(arguments: Mapping[str, Any], spec: ParameterSpec) -> Optional[Any]:
    """Return the value for one parameter.

    Args:
        arguments: The raw argument bag
        spec: The declared parameter

    Returns:
        The value, or None for an absent optional parameter

    Raises:
        MissingArgumentError: Required parameter absent (or null)
        InvalidArgumentTypeError: Present with the wrong semantic type
    """
    value = arguments.get(spec.name)
    if value is None:
        if spec.required:
            raise MissingArgumentError(spec.name)
        return None
    if not _matches(value, spec.type):
        raise InvalidArgumentTypeError(spec.name, spec.type.value, value)
    return value


def validate_arguments(
    arguments: Optional[Mapping[str, Any]], descriptor: ToolDescriptor
) -> Dict[str, Any]:
    """Validate a whole argument bag against a descriptor.

    Returns:
        Dict with only the declared parameters that were supplied
    """
    arguments = arguments or {}
    validated: Dict[str, Any] = {}
    for spec in descriptor.parameters:
        value = extract_argument(arguments, spec)
        if value is not None:
            validated[spec.name] = value
    return validated


def truncate_to_int(value: float) -> int:
    """Truncate a wire number toward zero for handlers with integer semantics.

    NUMBER parameters arrive as JSON numbers and may be floats. None of the
    built-in tools declares one; this is the helper a registered tool uses
    when it needs an int (a count, a pixel size), so every such tool rounds
    the same way.

    Raises:
        ValueError: For NaN or an infinity
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"cannot truncate non-finite number {value!r}")
    return int(value)
