"""Tests for the diagram tools."""

import base64
from pathlib import Path

import pytest

from awsdac_mcp_server.core.tool_system import RECOVERED_FAULT_MESSAGE, ErrorKind, InvocationRequest, ToolRegistry
from awsdac_mcp_server.rendering import OverwriteMode
from awsdac_mcp_server.tools import register_builtin_tools
from awsdac_mcp_server.tools.format_guide import USER_REQUIREMENTS_TEMPLATE_FILE, read_prompt_file

from conftest import FAKE_PNG, PNG_SIGNATURE, SAMPLE_YAML, FakeRenderer


def make_registry(renderer, workspaces):
    registry = ToolRegistry()
    register_builtin_tools(registry, renderer, workspaces)
    registry.freeze()
    return registry


def call(name, **arguments):
    return InvocationRequest(name=name, arguments=arguments)


@pytest.mark.asyncio
async def test_generate_diagram_returns_image(registry, renderer, scratch_dir):
    """Test the inline image variant returns text plus a base64 PNG."""
    result = await registry.dispatch(call("generateDiagram", yamlContent=SAMPLE_YAML))

    assert not result.is_error
    assert result.text_parts[0].text == "Diagram generated successfully"
    image = result.image_parts[0]
    assert image.mime_type == "image/png"
    decoded = base64.b64decode(image.data)
    assert decoded == FAKE_PNG
    assert decoded.startswith(PNG_SIGNATURE)

    wire = result.to_mcp()
    assert wire.isError is False
    assert wire.content[1].type == "image"
    assert wire.content[1].data == image.data
    assert wire.content[1].mimeType == "image/png"

    # The collaborator got the specification verbatim and was allowed to overwrite
    assert renderer.inputs == [SAMPLE_YAML]
    input_path, output_path, overwrite = renderer.calls[0]
    assert input_path.name == "input.yaml"
    assert output_path.name == "output.png"
    assert overwrite is OverwriteMode.FORCE

    assert list(scratch_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_generate_diagram_is_repeatable(registry):
    """Test the same input yields the same image size twice."""
    first = await registry.dispatch(call("generateDiagram", yamlContent=SAMPLE_YAML))
    second = await registry.dispatch(call("generateDiagram", yamlContent=SAMPLE_YAML))

    assert len(base64.b64decode(first.image_parts[0].data)) == len(base64.b64decode(second.image_parts[0].data))


@pytest.mark.asyncio
async def test_generate_diagram_format_is_case_insensitive(registry):
    """Test outputFormat accepts PNG in any case."""
    result = await registry.dispatch(call("generateDiagram", yamlContent=SAMPLE_YAML, outputFormat="PNG"))
    assert not result.is_error


@pytest.mark.asyncio
async def test_generate_diagram_unsupported_format(registry, renderer):
    """Test an unsupported format is reported without rendering."""
    result = await registry.dispatch(call("generateDiagram", yamlContent=SAMPLE_YAML, outputFormat="svg"))

    assert result.is_error
    assert result.error_kind is ErrorKind.REPORTED
    assert "unsupported format 'svg'" in result.text_parts[0].text
    assert renderer.calls == []


@pytest.mark.asyncio
async def test_generate_diagram_render_failure(workspaces, scratch_dir):
    """Test a collaborator failure is reported and the workspace removed."""
    renderer = FakeRenderer(fail_with=RuntimeError("renderer crashed"))
    registry = make_registry(renderer, workspaces)

    result = await registry.dispatch(call("generateDiagram", yamlContent=SAMPLE_YAML))

    assert result.is_error
    assert result.error_kind is ErrorKind.REPORTED
    assert result.text_parts[0].text.startswith("failed to create diagram: ")
    assert list(scratch_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_generate_diagram_fault_inside_workspace(registry, scratch_dir, monkeypatch):
    """Test a fault after the workspace exists is recovered and the workspace still removed."""
    reads = []

    def broken_read(self):
        reads.append(self)
        raise IndexError("list index out of range")

    monkeypatch.setattr(Path, "read_bytes", broken_read)

    result = await registry.dispatch(call("generateDiagram", yamlContent=SAMPLE_YAML))

    assert result.is_error
    assert result.error_kind is ErrorKind.RECOVERED
    assert result.text_parts[0].text == RECOVERED_FAULT_MESSAGE
    assert scratch_dir in reads[0].parents
    assert list(scratch_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_generate_diagram_empty_output(workspaces):
    """Test an empty rendered file is a failure, not an empty image."""
    registry = make_registry(FakeRenderer(payload=b""), workspaces)

    result = await registry.dispatch(call("generateDiagram", yamlContent=SAMPLE_YAML))

    assert result.is_error
    assert "empty file" in result.text_parts[0].text


@pytest.mark.asyncio
async def test_generate_to_file(registry, renderer, tmp_path, scratch_dir):
    """Test the file variant writes to the destination and reports the path."""
    destination = tmp_path / "out" / "nested" / "diagram.png"

    result = await registry.dispatch(
        call("generateDiagramToFile", yamlContent=SAMPLE_YAML, outputFilePath=str(destination))
    )

    assert not result.is_error
    assert result.text_parts[0].text == f"Diagram successfully generated and saved to: {destination}"
    assert result.image_parts == []
    assert destination.read_bytes().startswith(PNG_SIGNATURE)
    assert renderer.calls[0][2] is OverwriteMode.NO_OVERWRITE
    assert list(scratch_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_generate_to_file_keeps_existing_file(registry, tmp_path):
    """Test an existing destination is left untouched and reported."""
    destination = tmp_path / "diagram.png"
    destination.write_bytes(b"keep me")

    result = await registry.dispatch(
        call("generateDiagramToFile", yamlContent=SAMPLE_YAML, outputFilePath=str(destination))
    )

    assert result.is_error
    assert result.text_parts[0].text.startswith("failed to create diagram: ")
    assert "already exists" in result.text_parts[0].text
    assert destination.read_bytes() == b"keep me"


@pytest.mark.asyncio
async def test_generate_to_file_directory_failure(registry, tmp_path):
    """Test an uncreatable destination directory is reported."""
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")

    result = await registry.dispatch(
        call("generateDiagramToFile", yamlContent=SAMPLE_YAML, outputFilePath=str(blocker / "diagram.png"))
    )

    assert result.is_error
    assert result.text_parts[0].text.startswith("failed to create output directory: ")


@pytest.mark.asyncio
async def test_generate_to_file_verifies_output(workspaces, tmp_path):
    """Test a render that produces nothing fails verification."""
    registry = make_registry(FakeRenderer(write=False), workspaces)
    destination = tmp_path / "diagram.png"

    result = await registry.dispatch(
        call("generateDiagramToFile", yamlContent=SAMPLE_YAML, outputFilePath=str(destination))
    )

    assert result.is_error
    assert result.text_parts[0].text.startswith("failed to verify generated diagram file: ")


@pytest.mark.asyncio
async def test_generate_to_file_empty_path(registry, renderer):
    """Test an empty destination path is rejected before rendering."""
    result = await registry.dispatch(call("generateDiagramToFile", yamlContent=SAMPLE_YAML, outputFilePath=""))

    assert result.is_error
    assert "outputFilePath" in result.text_parts[0].text
    assert renderer.calls == []


@pytest.mark.asyncio
async def test_format_guide(registry):
    """Test the format guide returns the bundled text."""
    result = await registry.dispatch(call("getDiagramAsCodeFormat"))

    assert not result.is_error
    assert len(result.content) == 1
    text = result.text_parts[0].text
    assert "AWS::Diagram::Canvas" in text
    assert text == read_prompt_file(USER_REQUIREMENTS_TEMPLATE_FILE)
