"""Failure report display for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core import NonZeroExit, ProcessError, SpawnError, ValidationError

if TYPE_CHECKING:
    from ..core import PipelineOutcome

# Constants for report formatting
REPORT_WIDTH = 80
MAX_STDERR_LINES = 20


def print_failure_report(outcome: PipelineOutcome) -> None:
    """
    Print what failed, with enough context to diagnose without re-running.

    Args:
        outcome: Outcome of a failed run

    """
    error = outcome.error

    print("\n" + "=" * REPORT_WIDTH)
    print(f"{'PROCESSING FAILED':^{REPORT_WIDTH}}")
    print("=" * REPORT_WIDTH)
    print(f"{'Input':<12}: {outcome.request.input_path}")

    if error is None:
        print(f"{'Error':<12}: {outcome.message or 'Unknown error'}\n")
        return

    print(f"{'Error type':<12}: {type(error).__name__}")

    if isinstance(error, ProcessError):
        print(f"{'Command':<12}: {error.command_line}")
    if isinstance(error, NonZeroExit):
        print(f"{'Exit code':<12}: {error.code}")
        lines = error.stderr.splitlines()
        print("-" * REPORT_WIDTH)
        if len(lines) > MAX_STDERR_LINES:
            print(f"... {len(lines) - MAX_STDERR_LINES} earlier lines omitted")
        for line in lines[-MAX_STDERR_LINES:]:
            print(line)
        print("-" * REPORT_WIDTH)
    else:
        print(f"{'Error':<12}: {error.message}")

    tips = {
        SpawnError: "💡 TIP: Check that the program is installed and on PATH (media-cutter info)",
        ValidationError: "💡 TIP: Check the input, output and noise sample paths",
    }
    tip = next((text for kind, text in tips.items() if isinstance(error, kind)), None)
    if tip:
        print(f"\n{tip}")
    print()
