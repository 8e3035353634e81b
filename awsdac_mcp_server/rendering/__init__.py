"""Rendering collaborator used by the diagram tools."""

from .renderer import AwsdacRenderer, OverwriteMode, Renderer, render_safely

__all__ = [
    "AwsdacRenderer",
    "OverwriteMode",
    "Renderer",
    "render_safely",
]
