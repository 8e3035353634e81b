"""generateDiagram: render a specification and return the image inline."""

import asyncio
import base64
from typing import Any, Dict

from ..core.exceptions import FileAccessError, InvalidArgumentValueError, RenderError
from ..core.protocol.mcp_constants import LogLevel
from ..core.tool_system.tool_interface import (
    ImageContent,
    ParameterSpec,
    ParameterType,
    TextContent,
    ToolContext,
    ToolDescriptor,
    ToolResult,
)
from ..rendering import OverwriteMode
from .base import YAML_CONTENT_PARAM, DiagramTool

TOOL_NAME = "generateDiagram"
DEFAULT_OUTPUT_FORMAT = "png"

# Output format -> media type of the produced file
SUPPORTED_FORMATS: Dict[str, str] = {
    "png": "image/png",
}


class GenerateDiagramTool(DiagramTool):
    """Renders into a private workspace and returns the file base64-encoded."""

    def get_descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=TOOL_NAME,
            description="Generate AWS architecture diagrams from YAML-based Diagram-as-code specifications.",
            parameters=[
                YAML_CONTENT_PARAM,
                ParameterSpec(
                    name="outputFormat",
                    type=ParameterType.STRING,
                    required=False,
                    description="Output image format (default: png; png is the only supported format)",
                ),
            ],
        )

    async def execute(self, arguments: Dict[str, Any], context: ToolContext) -> ToolResult:
        yaml_content: str = arguments["yamlContent"]
        output_format = (arguments.get("outputFormat") or DEFAULT_OUTPUT_FORMAT).lower()
        if output_format not in SUPPORTED_FORMATS:
            raise InvalidArgumentValueError(
                "outputFormat",
                f"unsupported format '{output_format}'; supported formats: {', '.join(SUPPORTED_FORMATS)}",
            )

        await context.notify(LogLevel.INFO, "Rendering diagram", format=output_format)
        diagram = await asyncio.to_thread(self._render_to_bytes, yaml_content, output_format)
        await context.notify(LogLevel.INFO, "Diagram rendered", size=len(diagram))

        return ToolResult.success(
            TextContent(text="Diagram generated successfully"),
            ImageContent(
                data=base64.b64encode(diagram).decode("ascii"),
                mime_type=SUPPORTED_FORMATS[output_format],
            ),
        )

    def _render_to_bytes(self, yaml_content: str, output_format: str) -> bytes:
        with self.workspaces.workspace() as workspace:
            input_file = self.write_input(workspace, yaml_content)
            # The workspace is private to this call, so overwriting is safe
            output_file = workspace.path_for(f"output.{output_format}")
            self.render(input_file, output_file, OverwriteMode.FORCE)
            try:
                diagram = output_file.read_bytes()
            except OSError as e:
                raise FileAccessError("read generated diagram", str(e), cause=e) from e
            if not diagram:
                raise RenderError("renderer produced an empty file", str(input_file), str(output_file))
            return diagram
