"""generateDiagramToFile: render a specification to a caller-chosen path."""

import asyncio
from pathlib import Path
from typing import Any, Dict

from ..core.exceptions import DirectoryCreateError, InvalidArgumentValueError, VerificationError
from ..core.protocol.mcp_constants import LogLevel
from ..core.tool_system.tool_interface import (
    ParameterSpec,
    ParameterType,
    TextContent,
    ToolContext,
    ToolDescriptor,
    ToolResult,
)
from ..rendering import OverwriteMode
from .base import YAML_CONTENT_PARAM, DiagramTool

TOOL_NAME = "generateDiagramToFile"


class GenerateDiagramToFileTool(DiagramTool):
    """Renders straight to the destination, never replacing an existing file."""

    def get_descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=TOOL_NAME,
            description="Generate AWS architecture diagrams from YAML and save directly to file.",
            parameters=[
                YAML_CONTENT_PARAM,
                ParameterSpec(
                    name="outputFilePath",
                    type=ParameterType.STRING,
                    required=True,
                    description="Path where the generated PNG file should be saved",
                ),
            ],
        )

    async def execute(self, arguments: Dict[str, Any], context: ToolContext) -> ToolResult:
        yaml_content: str = arguments["yamlContent"]
        output_file_path: str = arguments["outputFilePath"]
        if not output_file_path.strip():
            raise InvalidArgumentValueError("outputFilePath", "must not be empty")

        await context.notify(LogLevel.INFO, "Rendering diagram to file", path=output_file_path)
        await asyncio.to_thread(self._render_to_file, yaml_content, Path(output_file_path))

        return ToolResult.success(
            TextContent(text=f"Diagram successfully generated and saved to: {output_file_path}"),
        )

    def _render_to_file(self, yaml_content: str, destination: Path) -> None:
        output_dir = destination.parent
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(str(output_dir), str(e), cause=e) from e

        with self.workspaces.workspace() as workspace:
            input_file = self.write_input(workspace, yaml_content)
            self.render(input_file, destination, OverwriteMode.NO_OVERWRITE)

        if not destination.exists():
            self.logger.error(
                "Renderer succeeded but destination is missing",
                output_file=str(destination),
            )
            raise VerificationError(str(destination), f"{destination} does not exist")
