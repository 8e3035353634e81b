"""
Timing helpers for tool invocations.

Collects per-phase durations during one invocation and logs them as a
single summary line once the invocation finishes.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from .logging import StructuredLoggerAdapter


class PerformanceTracker:
    """Tracks performance metrics for an operation and logs a summary."""

    def __init__(self, operation_name: str):
        """Initialize the performance tracker.

        Args:
            operation_name: Name of the operation being tracked
        """
        self.operation_name = operation_name
        self.metadata: Dict[str, Any] = {}
        self.start_time = time.monotonic()

    def add_metadata(self, **kwargs: Any) -> None:
        """Add metadata fields to be included in the summary."""
        self.metadata.update(kwargs)

    def get_total_time(self) -> float:
        """Get the total elapsed time since tracker creation."""
        return round(time.monotonic() - self.start_time, 3)

    def log_summary(self, logger: StructuredLoggerAdapter) -> None:
        """Log a single-line summary of all collected metrics."""
        fields: Dict[str, Any] = {"total_time": f"{self.get_total_time()}s"}
        fields.update(sorted(self.metadata.items()))
        logger.info(f"{self.operation_name} completed", **fields)


@asynccontextmanager
async def track_async_operation(
    operation_name: str, logger: StructuredLoggerAdapter
) -> AsyncIterator[PerformanceTracker]:
    """Async context manager for tracking an operation's performance.

    Usage:
        async with track_async_operation("tools/call", logger) as tracker:
            tracker.add_metadata(tool="generateDiagram")
            # ... do work ...

    The summary is logged on every exit path.
    """
    tracker = PerformanceTracker(operation_name)
    try:
        yield tracker
    finally:
        tracker.log_summary(logger)
