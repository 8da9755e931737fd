"""Core pipeline: request model, argument builders, process runner and orchestrator."""

from .base import (
    Cancelled,
    DecodeError,
    FilesystemError,
    NonZeroExit,
    PipelineError,
    PipelineOutcome,
    ProcessError,
    ProcessingStatus,
    SignalTerminated,
    SpawnError,
    ValidationError,
)
from .config import ConfigManager, RunOptions, with_config_overrides
from .output_parser import extract_max_volume
from .pipeline import PipelineOrchestrator, run
from .process import ProcessInvocation, ProcessRunner, check_availability
from .request import EditRequest, PipelineState, build_request
from .scratch import ScratchHandle, TemporaryArtifactManager
from .worker import PipelineTask, run_in_background

__all__ = [
    "Cancelled",
    "ConfigManager",
    "DecodeError",
    "EditRequest",
    "FilesystemError",
    "NonZeroExit",
    "PipelineError",
    "PipelineOrchestrator",
    "PipelineOutcome",
    "PipelineState",
    "PipelineTask",
    "ProcessError",
    "ProcessInvocation",
    "ProcessRunner",
    "ProcessingStatus",
    "RunOptions",
    "ScratchHandle",
    "SignalTerminated",
    "SpawnError",
    "TemporaryArtifactManager",
    "ValidationError",
    "build_request",
    "check_availability",
    "extract_max_volume",
    "run",
    "run_in_background",
    "with_config_overrides",
]
