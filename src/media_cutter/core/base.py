"""Base error types and run outcomes for the editing pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .formatting import render_args

if TYPE_CHECKING:
    from pathlib import Path

    from .request import EditRequest


class ProcessingStatus(Enum):
    """Status of a pipeline run."""

    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    def __init__(
        self,
        message: str,
        file_path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.file_path = file_path
        self.cause = cause


class ValidationError(PipelineError):
    """A required request field is missing or invalid."""


class FilesystemError(PipelineError):
    """Creating or deleting a scratch artifact failed."""


class DecodeError(PipelineError):
    """Diagnostic output of a program was not valid text."""

    def __init__(self, message: str, *, position: int | None = None, cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.position = position


class ProcessError(PipelineError):
    """Error tied to one external program invocation."""

    def __init__(
        self,
        message: str,
        *,
        program: str,
        args: list[str],
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.program = program
        self.args_list = list(args)

    @property
    def command_line(self) -> str:
        """Program name followed by its quoted arguments."""
        return f"{self.program} {render_args(self.args_list)}"


class SpawnError(ProcessError):
    """Program could not be started."""

    def __init__(self, program: str, args: list[str], cause: OSError) -> None:
        message = f"Failed to start: {cause}\nCommand was: {program} {render_args(args)}"
        super().__init__(message, program=program, args=args, cause=cause)


class NonZeroExit(ProcessError):
    """Program ran and exited with a non-zero status."""

    def __init__(self, program: str, args: list[str], code: int, stderr: str) -> None:
        message = (
            f"{program} exited with non-zero status code: {code}\n"
            f"Arguments were: {render_args(args)}\n\n"
            f"Error output: {stderr}"
        )
        super().__init__(message, program=program, args=args)
        self.code = code
        self.stderr = stderr


class SignalTerminated(ProcessError):
    """Program was killed by a signal, no exit code available."""

    def __init__(self, program: str, args: list[str], signal_number: int | None = None) -> None:
        super().__init__(f"{program} terminated by signal", program=program, args=args)
        self.signal_number = signal_number


class Cancelled(PipelineError):
    """The run was cancelled by the caller."""

    def __init__(self, message: str = "Pipeline run cancelled") -> None:
        super().__init__(message)


@dataclass
class PipelineOutcome:
    """Result of one pipeline run, ready to show to an end user."""

    request: EditRequest
    status: ProcessingStatus
    message: str = ""
    error: PipelineError | None = None
    processing_time: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status is ProcessingStatus.SUCCESS
