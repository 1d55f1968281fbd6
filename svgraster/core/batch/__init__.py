"""Batch processing module for converting many SVG files."""

from .coordinator import BatchCoordinator, convert_directory, convert_files
from .models import (
    BatchOutcome,
    BatchResult,
    ConversionJob,
    TaskFailure,
    TaskOutcome,
    TaskSuccess,
)
from .scheduler import TaskPoolScheduler

__all__ = [
    "BatchCoordinator",
    "BatchOutcome",
    "BatchResult",
    "ConversionJob",
    "TaskFailure",
    "TaskOutcome",
    "TaskPoolScheduler",
    "TaskSuccess",
    "convert_directory",
    "convert_files",
]
