"""getDiagramAsCodeFormat: return the bundled format guide."""

from functools import lru_cache
from importlib import resources
from typing import Any, Dict

from ..core.exceptions import FileAccessError
from ..core.tool_system.tool_interface import (
    TextContent,
    Tool,
    ToolContext,
    ToolDescriptor,
    ToolResult,
)

TOOL_NAME = "getDiagramAsCodeFormat"
USER_REQUIREMENTS_TEMPLATE_FILE = "prompts/generate_dac_from_user_requirements.txt"


@lru_cache(maxsize=None)
def read_prompt_file(file_path: str) -> str:
    """Read a prompt bundled with this package."""
    try:
        return resources.files(__package__).joinpath(file_path).read_text(encoding="utf-8")
    except OSError as e:
        raise FileAccessError(f"read embedded prompt file {file_path}", str(e), cause=e) from e


class FormatGuideTool(Tool):
    """Explains the Diagram-as-code YAML format, with an example."""

    def get_descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=TOOL_NAME,
            description="Get Diagram-as-code format specification, examples, and best practices.",
        )

    async def execute(self, arguments: Dict[str, Any], context: ToolContext) -> ToolResult:
        return ToolResult.success(TextContent(text=read_prompt_file(USER_REQUIREMENTS_TEMPLATE_FILE)))
