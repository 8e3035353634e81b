"""
Rendering collaborator interface.

The server does not draw diagrams itself. It hands an input specification
file and an output path to a Renderer and either gets a file or a
RenderError back. AwsdacRenderer drives the `awsdac` command line tool in a
subprocess.
"""

import os
import subprocess
import traceback
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from ..core.exceptions import RenderError
from ..utils.logging import StructuredLoggerAdapter, get_structured_logger

logger = get_structured_logger(__name__)

PathLike = Union[str, os.PathLike]


class OverwriteMode(str, Enum):
    """What the renderer does when the output path already exists."""
    FORCE = "force"
    NO_OVERWRITE = "no-overwrite"


class Renderer(ABC):
    """Turns a diagram specification file into an image file."""

    @abstractmethod
    def render(self, input_path: PathLike, output_path: PathLike, overwrite: OverwriteMode) -> None:
        """Render input_path into output_path.

        NO_OVERWRITE must fail if output_path exists; FORCE always writes.

        Raises:
            RenderError: If rendering fails
        """
        pass


class AwsdacRenderer(Renderer):
    """Renderer backed by the awsdac CLI."""

    def __init__(self, executable: str = "awsdac", timeout: Optional[float] = 120.0) -> None:
        """Initialize the renderer.

        Args:
            executable: Name or path of the awsdac binary
            timeout: Seconds before a render is abandoned (None waits forever)
        """
        self.executable = executable
        self.timeout = timeout

    def build_command(self, input_path: PathLike, output_path: PathLike, overwrite: OverwriteMode) -> List[str]:
        cmd = [self.executable, os.fspath(input_path), "--output", os.fspath(output_path)]
        if overwrite is OverwriteMode.FORCE:
            cmd.append("--force")
        return cmd

    def render(self, input_path: PathLike, output_path: PathLike, overwrite: OverwriteMode) -> None:
        input_str, output_str = os.fspath(input_path), os.fspath(output_path)
        if overwrite is OverwriteMode.NO_OVERWRITE and Path(output_str).exists():
            raise RenderError(
                f"output file {output_str} already exists",
                input_path=input_str,
                output_path=output_str,
            )

        cmd = self.build_command(input_str, output_str, overwrite)
        logger.debug("Running renderer", cmd=cmd)
        try:
            completed = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                shell=False,
            )
        except FileNotFoundError as e:
            raise RenderError(
                f"renderer executable '{self.executable}' not found",
                input_path=input_str,
                output_path=output_str,
                cause=e,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise RenderError(
                f"renderer timed out after {self.timeout} seconds",
                input_path=input_str,
                output_path=output_str,
                cause=e,
            ) from e

        if completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or "").strip()
            raise RenderError(
                detail or f"renderer exited with status {completed.returncode}",
                input_path=input_str,
                output_path=output_str,
            )
        if not Path(output_str).exists():
            raise RenderError(
                "renderer reported success but produced no output",
                input_path=input_str,
                output_path=output_str,
            )


def render_safely(
    renderer: Renderer,
    input_path: PathLike,
    output_path: PathLike,
    overwrite: OverwriteMode,
    log: Optional[StructuredLoggerAdapter] = None,
) -> None:
    """Call the renderer, turning any crash inside it into a RenderError.

    RenderErrors pass through untouched. Every failure is logged with the
    input and output paths.
    """
    log = log or logger
    input_str, output_str = os.fspath(input_path), os.fspath(output_path)
    try:
        renderer.render(input_path, output_path, overwrite)
    except RenderError as e:
        log.warning(
            "Diagram creation failed",
            input_file=input_str,
            output_file=output_str,
            reason=e.reason,
        )
        raise
    except Exception as e:
        log.error(
            f"Crash in diagram creation: {e!r}\nStack trace:\n{traceback.format_exc()}",
            input_file=input_str,
            output_file=output_str,
        )
        raise RenderError(
            f"panic occurred during diagram creation: {e}",
            input_path=input_str,
            output_path=output_str,
            cause=e,
        ) from e
