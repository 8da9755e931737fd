"""Media Cutter - trim, filter, normalize and denoise media with ffmpeg and sox."""

from __future__ import annotations

__version__ = "0.1.0"
__description__ = "Trim, filter, normalize and denoise media files with ffmpeg and sox"

# Public API exports
from .config import MediaCutterConfig, get_config
from .core import (
    Cancelled,
    ConfigManager,
    DecodeError,
    EditRequest,
    FilesystemError,
    NonZeroExit,
    PipelineError,
    PipelineOrchestrator,
    PipelineOutcome,
    PipelineTask,
    ProcessingStatus,
    SignalTerminated,
    SpawnError,
    ValidationError,
    build_request,
    run,
    run_in_background,
)

__all__ = [
    # Configuration
    "MediaCutterConfig",
    "get_config",
    "ConfigManager",
    # Requests and runs
    "EditRequest",
    "build_request",
    "run",
    "run_in_background",
    "PipelineOrchestrator",
    "PipelineTask",
    "PipelineOutcome",
    "ProcessingStatus",
    # Exceptions
    "PipelineError",
    "ValidationError",
    "SpawnError",
    "NonZeroExit",
    "SignalTerminated",
    "FilesystemError",
    "DecodeError",
    "Cancelled",
]
