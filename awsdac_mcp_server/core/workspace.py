"""Scratch workspaces for file-based interchange with the renderer.

Each invocation that needs files gets its own uniquely named temporary
directory. The directory is removed when the invocation ends, whatever the
outcome; a failed removal is logged and never turns a finished call into a
failure.
"""

import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..utils.logging import StructuredLoggerAdapter, get_structured_logger
from .exceptions import WorkspaceCreateError

DEFAULT_WORKSPACE_PREFIX = "awsdac-mcp"


class ScratchWorkspace:
    """An invocation-private temporary directory."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def path_for(self, name: str) -> Path:
        """Return a path for a file inside the workspace."""
        candidate = (self.path / name).resolve()
        if candidate.parent != self.path.resolve():
            raise ValueError(f"'{name}' is not a plain file name")
        return candidate

    def write_text(self, name: str, content: str) -> Path:
        """Write a text file into the workspace and return its path."""
        target = self.path_for(name)
        target.write_text(content, encoding="utf-8")
        return target

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def __repr__(self) -> str:
        return f"<ScratchWorkspace {self.path}>"


class ScratchWorkspaceManager:
    """Creates and removes scratch workspaces."""

    def __init__(
        self,
        base_dir: Optional[str] = None,
        prefix: str = DEFAULT_WORKSPACE_PREFIX,
        logger: Optional[StructuredLoggerAdapter] = None,
    ) -> None:
        """Initialize the manager.

        Args:
            base_dir: Parent directory for workspaces (system temp dir if None)
            prefix: Name prefix for workspace directories
            logger: Operational log for cleanup failures
        """
        self.base_dir = base_dir
        self.prefix = prefix
        self.logger = logger or get_structured_logger(__name__)

    def acquire(self) -> ScratchWorkspace:
        """Create a fresh workspace.

        Raises:
            WorkspaceCreateError: If the filesystem refuses the directory
        """
        try:
            path = tempfile.mkdtemp(prefix=self.prefix, dir=self.base_dir)
        except OSError as e:
            raise WorkspaceCreateError(str(e), cause=e) from e
        self.logger.debug("Workspace acquired", path=path)
        return ScratchWorkspace(Path(path))

    def release(self, workspace: ScratchWorkspace) -> None:
        """Remove a workspace recursively. Failures are logged only."""
        try:
            shutil.rmtree(workspace.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning("Failed to remove temp directory", path=str(workspace.path), error=str(e))
            return
        self.logger.debug("Workspace released", path=str(workspace.path))

    @contextmanager
    def workspace(self) -> Iterator[ScratchWorkspace]:
        """Bracket one invocation: acquire, yield, release on every exit path."""
        workspace = self.acquire()
        try:
            yield workspace
        finally:
            self.release(workspace)
