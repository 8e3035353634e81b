"""Shared fixtures for the test suite."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from awsdac_mcp_server.api.main import create_app
from awsdac_mcp_server.config.settings import Settings
from awsdac_mcp_server.core.exceptions import RenderError
from awsdac_mcp_server.core.tool_system import ToolRegistry
from awsdac_mcp_server.core.workspace import ScratchWorkspaceManager
from awsdac_mcp_server.rendering import OverwriteMode, Renderer
from awsdac_mcp_server.tools import register_builtin_tools

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
FAKE_PNG = PNG_SIGNATURE + b"fake-diagram-payload"

SAMPLE_YAML = """Diagram:
  Resources:
    Canvas:
      Type: AWS::Diagram::Canvas
"""


class FakeRenderer(Renderer):
    """Renderer that writes a fixed payload instead of running awsdac."""

    def __init__(self, payload: bytes = FAKE_PNG, fail_with: Optional[Exception] = None, write: bool = True):
        self.payload = payload
        self.fail_with = fail_with
        self.write = write
        self.calls: List[Tuple[Path, Path, OverwriteMode]] = []
        self.inputs: List[str] = []

    def render(self, input_path, output_path, overwrite):
        input_path, output_path = Path(input_path), Path(output_path)
        self.calls.append((input_path, output_path, overwrite))
        self.inputs.append(input_path.read_text(encoding="utf-8"))
        if self.fail_with is not None:
            raise self.fail_with
        if overwrite is OverwriteMode.NO_OVERWRITE and output_path.exists():
            raise RenderError(f"output file {output_path} already exists")
        if self.write:
            output_path.write_bytes(self.payload)


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def scratch_dir(tmp_path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def workspaces(scratch_dir) -> ScratchWorkspaceManager:
    return ScratchWorkspaceManager(base_dir=str(scratch_dir))


@pytest.fixture
def registry(renderer, workspaces) -> ToolRegistry:
    registry = ToolRegistry()
    register_builtin_tools(registry, renderer, workspaces)
    registry.freeze()
    return registry


@pytest.fixture
def stateless_client(registry):
    app = create_app(Settings(stateless=True), registry=registry)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def stateful_client(registry):
    app = create_app(Settings(), registry=registry)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
