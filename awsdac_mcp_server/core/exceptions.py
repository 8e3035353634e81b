"""
Custom exceptions for the Diagram-as-Code MCP server.

All errors derive from MCPException so they share one structure
(message, details, cause) and can be mapped uniformly onto tool results,
JSON-RPC errors and HTTP responses.

The split that matters at runtime:
- ToolError subclasses are business errors. A handler raising one gets an
  Error tool result carrying the message unchanged.
- ArgumentError and UnknownToolError are caller errors detected at the
  dispatch boundary. The MCP surface answers them with a JSON-RPC error.
- Anything that is not an MCPException is a fault and is recovered by the
  fault boundary.
"""

from typing import Optional, Dict, Any


class MCPException(Exception):
    """Base exception for all server errors.

    Attributes:
        message: Human-readable error message
        details: Additional context about the error
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        return self.message


# Registry exceptions
class RegistryException(MCPException):
    """Base exception for tool registry errors."""
    pass


class DuplicateToolError(RegistryException):
    """Raised when a tool name is registered twice."""

    def __init__(self, tool_name: str):
        super().__init__(
            f"tool '{tool_name}' is already registered",
            details={"tool_name": tool_name}
        )


class UnknownToolError(RegistryException):
    """Raised when a call names a tool that is not registered."""

    def __init__(self, tool_name: str):
        super().__init__(
            f"unknown tool '{tool_name}'",
            details={"tool_name": tool_name}
        )


# Tool (business) exceptions
class ToolError(MCPException):
    """Base exception for errors a tool reports back to its caller."""
    pass


class ArgumentError(ToolError):
    """Base exception for argument extraction failures."""
    pass


class MissingArgumentError(ArgumentError):
    """Raised when a required argument is absent."""

    def __init__(self, name: str):
        super().__init__(
            f"missing required argument '{name}'",
            details={"argument": name}
        )


class InvalidArgumentTypeError(ArgumentError):
    """Raised when an argument is present but has the wrong type."""

    def __init__(self, name: str, expected: str, value: Any):
        super().__init__(
            f"invalid argument '{name}': expected {expected}, got {type(value).__name__}",
            details={"argument": name, "expected": expected, "actual": type(value).__name__}
        )


class InvalidArgumentValueError(ArgumentError):
    """Raised by a handler when a well-typed argument has an unusable value."""

    def __init__(self, name: str, reason: str):
        super().__init__(
            f"invalid argument '{name}': {reason}",
            details={"argument": name, "reason": reason}
        )


class WorkspaceCreateError(ToolError):
    """Raised when a scratch workspace cannot be created."""

    def __init__(self, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"failed to create temp directory: {reason}",
            details={"reason": reason},
            cause=cause
        )


class RenderError(ToolError):
    """Raised when the rendering collaborator fails."""

    def __init__(
        self,
        reason: str,
        input_path: Optional[str] = None,
        output_path: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(
            f"failed to create diagram: {reason}",
            details={"reason": reason, "input_file": input_path, "output_file": output_path},
            cause=cause
        )
        self.reason = reason


class DirectoryCreateError(ToolError):
    """Raised when the destination directory cannot be created."""

    def __init__(self, directory: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"failed to create output directory: {reason}",
            details={"directory": directory, "reason": reason},
            cause=cause
        )


class VerificationError(ToolError):
    """Raised when a rendered file is missing after a successful render."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"failed to verify generated diagram file: {reason}",
            details={"path": path, "reason": reason}
        )


class FileAccessError(ToolError):
    """Raised when an input, output or bundled file cannot be read or written."""

    def __init__(self, action: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"failed to {action}: {reason}",
            details={"action": action, "reason": reason},
            cause=cause
        )


# Configuration exceptions
class ConfigurationError(MCPException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, reason: str):
        super().__init__(
            f"Configuration error for '{config_key}': {reason}",
            details={"config_key": config_key, "reason": reason}
        )
