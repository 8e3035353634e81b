"""Tool interface and result types.

This module defines the contract every tool implements: a descriptor that
callers can introspect, and an async handler that turns validated
arguments into exactly one ToolResult.
"""

import uuid
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Tuple, Union

from mcp import types
from pydantic import BaseModel, ConfigDict, Field

from ..protocol.mcp_constants import LogLevel


class ParameterType(str, Enum):
    """Semantic types a tool parameter may declare."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class ParameterSpec(BaseModel):
    """One declared tool parameter."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Argument key, matched case-sensitively")
    type: ParameterType = Field(..., description="Semantic type of the value")
    required: bool = Field(default=False)
    description: str = Field(default="")


class ToolDescriptor(BaseModel):
    """Name, description and parameter schema of a tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique name of the tool")
    description: str = Field(..., description="Human-readable description")
    parameters: Tuple[ParameterSpec, ...] = Field(default_factory=tuple)

    def input_schema(self) -> Dict[str, Any]:
        """Render the parameters as a JSON-schema object."""
        properties = {
            spec.name: {"type": spec.type.value, "description": spec.description}
            for spec in self.parameters
        }
        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        required = [spec.name for spec in self.parameters if spec.required]
        if required:
            schema["required"] = required
        return schema

    def to_mcp(self) -> types.Tool:
        """Catalog entry as returned by tools/list."""
        return types.Tool(name=self.name, description=self.description, inputSchema=self.input_schema())


class TextContent(BaseModel):
    """A text content part."""

    type: Literal["text"] = "text"
    text: str

    def to_mcp(self) -> types.TextContent:
        return types.TextContent(type="text", text=self.text)


class ImageContent(BaseModel):
    """A binary content part, base64-encoded."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["image"] = "image"
    data: str = Field(..., description="Base64-encoded payload")
    mime_type: str = Field(..., alias="mimeType")

    def to_mcp(self) -> types.ImageContent:
        return types.ImageContent(type="image", data=self.data, mimeType=self.mime_type)


ContentPart = Union[TextContent, ImageContent]


class ErrorKind(str, Enum):
    """Why an invocation produced an error result."""
    REPORTED = "reported"
    RECOVERED = "recovered"


class ToolResult(BaseModel):
    """Outcome of exactly one invocation."""

    content: List[ContentPart] = Field(default_factory=list)
    is_error: bool = False
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, *parts: ContentPart) -> "ToolResult":
        return cls(content=list(parts))

    @classmethod
    def error(cls, message: str, kind: ErrorKind = ErrorKind.REPORTED) -> "ToolResult":
        return cls(content=[TextContent(text=message)], is_error=True, error_kind=kind)

    @property
    def text_parts(self) -> List[TextContent]:
        return [part for part in self.content if isinstance(part, TextContent)]

    @property
    def image_parts(self) -> List[ImageContent]:
        return [part for part in self.content if isinstance(part, ImageContent)]

    def to_mcp(self) -> types.CallToolResult:
        """Wire form of the result; the error kind stays server-side."""
        return types.CallToolResult(
            content=[part.to_mcp() for part in self.content],
            isError=self.is_error,
        )


class InvocationRequest(BaseModel):
    """One decoded tools/call."""

    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., description="Tool to invoke")
    arguments: Dict[str, Any] = Field(default_factory=dict)
    session_id: Optional[str] = None


LogSink = Callable[[LogLevel, str, Dict[str, Any]], Awaitable[None]]


class ToolContext:
    """Per-invocation context handed to a handler.

    Carries the identifiers needed for diagnostics and an optional sink for
    log notifications addressed to the caller's session.
    """

    def __init__(
        self,
        tool_name: str,
        request_id: str,
        session_id: Optional[str] = None,
        log_sink: Optional[LogSink] = None,
    ) -> None:
        self.tool_name = tool_name
        self.request_id = request_id
        self.session_id = session_id
        self._log_sink = log_sink

    async def notify(self, level: LogLevel, message: str, **data: Any) -> None:
        """Send a log notification to the caller, if a session listens."""
        if self._log_sink is not None:
            await self._log_sink(level, message, {"tool": self.tool_name, **data})


ToolHandler = Callable[[Dict[str, Any], ToolContext], Awaitable[ToolResult]]


class Tool(ABC):
    """Abstract base class for tools served by the gateway."""

    @abstractmethod
    def get_descriptor(self) -> ToolDescriptor:
        """Get the tool's descriptor.

        Returns:
            ToolDescriptor: Name, description and parameter schema
        """
        pass

    @abstractmethod
    async def execute(self, arguments: Dict[str, Any], context: ToolContext) -> ToolResult:
        """Run the tool.

        Args:
            arguments: Arguments already validated against the descriptor
            context: Per-invocation context

        Returns:
            ToolResult: The outcome of the invocation

        Raises:
            ToolError: For failures the caller should see verbatim
        """
        pass

    def __str__(self) -> str:
        return self.get_descriptor().name

    def __repr__(self) -> str:
        return f"<Tool {self.get_descriptor().name}>"
