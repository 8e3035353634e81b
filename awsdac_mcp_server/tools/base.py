"""Shared pieces of the diagram tools."""

from typing import Optional

from ..core.exceptions import FileAccessError
from ..core.tool_system.tool_interface import ParameterSpec, ParameterType, Tool
from ..core.workspace import ScratchWorkspace, ScratchWorkspaceManager
from ..rendering import OverwriteMode, Renderer, render_safely
from ..utils.logging import StructuredLoggerAdapter, get_structured_logger

INPUT_FILENAME = "input.yaml"

YAML_CONTENT_PARAM = ParameterSpec(
    name="yamlContent",
    type=ParameterType.STRING,
    required=True,
    description="Complete YAML specification for the AWS architecture diagram",
)


class DiagramTool(Tool):
    """Base class for tools that render through a scratch workspace."""

    def __init__(
        self,
        renderer: Renderer,
        workspaces: ScratchWorkspaceManager,
        logger: Optional[StructuredLoggerAdapter] = None,
    ) -> None:
        self.renderer = renderer
        self.workspaces = workspaces
        self.logger = logger or get_structured_logger(type(self).__module__)

    def write_input(self, workspace: ScratchWorkspace, yaml_content: str):
        try:
            return workspace.write_text(INPUT_FILENAME, yaml_content)
        except OSError as e:
            raise FileAccessError("write input file", str(e), cause=e) from e

    def render(self, input_file, output_file, overwrite: OverwriteMode) -> None:
        render_safely(self.renderer, input_file, output_file, overwrite, log=self.logger)
