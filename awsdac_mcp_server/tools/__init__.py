"""
Tools served by the gateway.
"""

from typing import List

from ..core.tool_system import Tool, ToolRegistry
from ..core.workspace import ScratchWorkspaceManager
from ..rendering import Renderer
from .format_guide import FormatGuideTool
from .generate_diagram import GenerateDiagramTool
from .generate_diagram_to_file import GenerateDiagramToFileTool


def builtin_tools(renderer: Renderer, workspaces: ScratchWorkspaceManager) -> List[Tool]:
    """Instantiate the diagram tools in catalog order."""
    return [
        GenerateDiagramTool(renderer, workspaces),
        GenerateDiagramToFileTool(renderer, workspaces),
        FormatGuideTool(),
    ]


def register_builtin_tools(
    registry: ToolRegistry,
    renderer: Renderer,
    workspaces: ScratchWorkspaceManager,
) -> None:
    """Register every built-in tool with the registry."""
    for tool in builtin_tools(renderer, workspaces):
        registry.register_tool(tool)


__all__ = [
    "FormatGuideTool",
    "GenerateDiagramTool",
    "GenerateDiagramToFileTool",
    "builtin_tools",
    "register_builtin_tools",
]
