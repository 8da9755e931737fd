"""Process and preview CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from tqdm import tqdm

from ...config.constants import EXIT_FAILURE, EXIT_INTERRUPTED
from ...core import (
    EditRequest,
    PipelineOrchestrator,
    PipelineTask,
    ProcessingStatus,
    ValidationError,
    build_request,
)
from ..failure_report import print_failure_report

if TYPE_CHECKING:
    import argparse

    from ...core import ConfigManager, PipelineOutcome

LOG = logging.getLogger(__name__)


def _add_editing_options(parser: argparse.ArgumentParser) -> None:
    """Options shared by process and preview."""
    parser.add_argument("--from", dest="from_time", type=float, default=0.0, help="Start of the trim window in seconds")
    parser.add_argument("--to", dest="to_time", type=float, required=True, help="End of the trim window in seconds")
    parser.add_argument("--no-video", action="store_true", help="Drop the video stream")
    parser.add_argument("--no-audio", action="store_true", help="Drop the audio stream")
    parser.add_argument("--high-pass", type=int, metavar="HZ", help="High-pass filter frequency")
    parser.add_argument("--low-pass", type=int, metavar="HZ", help="Low-pass filter frequency")
    parser.add_argument("--normalize", action="store_true", help="Peak-normalize using a volume measurement pass")
    parser.add_argument("--volume", type=float, default=0.0, metavar="DB", help="Gain applied to the audio in dB")
    parser.add_argument("--noise-profile", type=Path, metavar="PATH", help="Sample of noise to remove")
    parser.add_argument("--noise-amount", type=float, metavar="X", help="Noise reduction strength, e.g. 0.21")


class EditCommands:
    """Process and preview command handlers."""

    COMMANDS = ("process", "preview")

    def __init__(self, config_manager: ConfigManager) -> None:
        """Initialize edit commands handler."""
        self.config_manager = config_manager

    def add_subcommands(self, subparsers: argparse._SubParsersAction) -> None:
        """Add process and preview subcommands."""
        process_parser = subparsers.add_parser("process", help="Cut and filter a media file into a new file")
        process_parser.add_argument("input", type=Path, help="Input media file")
        process_parser.add_argument("output", type=Path, help="Output media file")
        process_parser.add_argument("--overwrite", "-y", action="store_true", help="Overwrite an existing output file")
        _add_editing_options(process_parser)

        preview_parser = subparsers.add_parser("preview", help="Play the edited media without writing a file")
        preview_parser.add_argument("input", type=Path, help="Input media file")
        _add_editing_options(preview_parser)

    def handle_command(self, args: argparse.Namespace) -> int:
        """Handle process/preview command execution."""
        try:
            request = self.build_request_from_args(args)
            request.check_paths()
        except ValidationError as e:
            LOG.error("%s", e.message)
            return EXIT_FAILURE

        outcome = self._run_with_progress(request)

        if outcome.status is ProcessingStatus.SUCCESS:
            if not request.preview:
                print(f"✅ {outcome.message} Wrote {request.output_path} in {outcome.processing_time:.1f}s")
            return 0
        if outcome.status is ProcessingStatus.CANCELLED:
            LOG.warning("Operation cancelled")
            return EXIT_INTERRUPTED

        print_failure_report(outcome)
        return EXIT_FAILURE

    @staticmethod
    def build_request_from_args(args: argparse.Namespace) -> EditRequest:
        """Translate parsed arguments into an EditRequest."""
        preview = args.command == "preview"

        noise_profile = args.noise_profile
        noise_amount = args.noise_amount
        if (noise_profile is None) != (noise_amount is None):
            LOG.warning("Noise reduction needs both --noise-profile and --noise-amount, skipping it")
            noise_profile = noise_amount = None

        return build_request(
            args.input,
            "" if preview else args.output,
            from_time=args.from_time,
            to_time=args.to_time,
            preview=preview,
            allow_overwrite=getattr(args, "overwrite", False),
            ignore_video=args.no_video,
            ignore_audio=args.no_audio,
            high_pass_hz=args.high_pass,
            low_pass_hz=args.low_pass,
            peak_normalize=args.normalize,
            volume_change_db=args.volume,
            noise_profile_path=noise_profile,
            noise_reduction_amount=noise_amount,
        )

    def _run_with_progress(self, request: EditRequest) -> PipelineOutcome:
        """Run the pipeline on a worker thread while showing stage progress."""
        stages = PipelineOrchestrator.planned_stages(request)
        progress_bar = tqdm(total=len(stages), desc="Starting", unit="stage")
        started: list[str] = []

        def on_stage(stage: str) -> None:
            if started:
                progress_bar.update(1)
            started.append(stage)
            progress_bar.set_description(stage.capitalize())

        orchestrator = PipelineOrchestrator.from_config(self.config_manager, progress_callback=on_stage)
        task = PipelineTask(request, orchestrator)
        task.start()

        try:
            try:
                outcome = task.result()
            except KeyboardInterrupt:
                task.cancel()
                outcome = task.result()
            if outcome.status is ProcessingStatus.SUCCESS:
                progress_bar.update(progress_bar.total - progress_bar.n)
        finally:
            progress_bar.close()

        return outcome
