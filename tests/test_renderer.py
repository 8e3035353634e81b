"""Tests for the rendering collaborator."""

import pytest

from awsdac_mcp_server.core.exceptions import RenderError
from awsdac_mcp_server.rendering import AwsdacRenderer, OverwriteMode, render_safely

from conftest import FakeRenderer


def test_build_command():
    """Test the awsdac command line for both overwrite modes."""
    renderer = AwsdacRenderer("/opt/bin/awsdac")

    assert renderer.build_command("in.yaml", "out.png", OverwriteMode.NO_OVERWRITE) == [
        "/opt/bin/awsdac", "in.yaml", "--output", "out.png",
    ]
    assert renderer.build_command("in.yaml", "out.png", OverwriteMode.FORCE)[-1] == "--force"


def test_no_overwrite_keeps_existing_file(tmp_path):
    """Test an existing output fails without touching the file."""
    output = tmp_path / "diagram.png"
    output.write_bytes(b"original")

    with pytest.raises(RenderError) as exc_info:
        AwsdacRenderer().render(tmp_path / "input.yaml", output, OverwriteMode.NO_OVERWRITE)

    assert "already exists" in str(exc_info.value)
    assert output.read_bytes() == b"original"


def test_missing_executable(tmp_path):
    """Test a missing awsdac binary is a RenderError."""
    input_file = tmp_path / "input.yaml"
    input_file.write_text("Diagram: {}")
    renderer = AwsdacRenderer(str(tmp_path / "no-such-awsdac"))

    with pytest.raises(RenderError) as exc_info:
        renderer.render(input_file, tmp_path / "out.png", OverwriteMode.FORCE)
    assert "not found" in str(exc_info.value)


def test_render_safely_converts_crash(tmp_path):
    """Test an unexpected renderer exception becomes a RenderError."""
    input_file = tmp_path / "input.yaml"
    input_file.write_text("Diagram: {}")
    renderer = FakeRenderer(fail_with=ZeroDivisionError("division by zero"))

    with pytest.raises(RenderError) as exc_info:
        render_safely(renderer, input_file, tmp_path / "out.png", OverwriteMode.FORCE)

    message = str(exc_info.value)
    assert message.startswith("failed to create diagram: panic occurred during diagram creation")
    assert isinstance(exc_info.value.cause, ZeroDivisionError)


def test_render_safely_passes_render_errors_through(tmp_path):
    """Test RenderErrors are re-raised unchanged."""
    input_file = tmp_path / "input.yaml"
    input_file.write_text("Diagram: {}")
    original = RenderError("invalid resource type")
    renderer = FakeRenderer(fail_with=original)

    with pytest.raises(RenderError) as exc_info:
        render_safely(renderer, input_file, tmp_path / "out.png", OverwriteMode.FORCE)
    assert exc_info.value is original
