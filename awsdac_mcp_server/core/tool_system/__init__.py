"""Tool system components."""

from .arguments import extract_argument, truncate_to_int, validate_arguments
from .isolation import RECOVERED_FAULT_MESSAGE, FaultBoundary
from .registry import ToolRegistry
from .tool_interface import (
    ContentPart,
    ErrorKind,
    ImageContent,
    InvocationRequest,
    LogSink,
    ParameterSpec,
    ParameterType,
    TextContent,
    Tool,
    ToolContext,
    ToolDescriptor,
    ToolHandler,
    ToolResult,
)

__all__ = [
    "ContentPart",
    "ErrorKind",
    "FaultBoundary",
    "ImageContent",
    "InvocationRequest",
    "LogSink",
    "ParameterSpec",
    "ParameterType",
    "RECOVERED_FAULT_MESSAGE",
    "TextContent",
    "Tool",
    "ToolContext",
    "ToolDescriptor",
    "ToolHandler",
    "ToolRegistry",
    "ToolResult",
    "extract_argument",
    "truncate_to_int",
    "validate_arguments",
]
