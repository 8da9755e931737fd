"""Main CLI interface for media cutter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config.constants import EXIT_FAILURE, EXIT_INTERRUPTED, VERBOSE_LOGGING_THRESHOLD
from ..core import ConfigManager, RunOptions, with_config_overrides
from .commands import EditCommands, UtilityCommands


class MediaCutterCLI:
    """Main CLI interface."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_manager = ConfigManager(config_path)
        self.edit_commands = EditCommands(self.config_manager)
        self.utility_commands = UtilityCommands(self.config_manager)

    def setup_logging(self, verbosity: int) -> None:
        """Setup logging based on verbosity level."""
        level_map = {
            1: logging.INFO,
            2: logging.DEBUG,
        }

        if verbosity == 0:
            level = logging.getLevelName(self.config_manager.config.global_.log_level)
            if not isinstance(level, int):
                level = logging.WARNING
        else:
            level = level_map.get(verbosity, logging.DEBUG)

        log_format = (
            "%(levelname)s: %(name)s: %(message)s"
            if verbosity >= VERBOSE_LOGGING_THRESHOLD
            else "%(levelname)s: %(message)s"
        )

        logging.basicConfig(level=level, format=log_format, handlers=[logging.StreamHandler(sys.stderr)])

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser."""
        parser = argparse.ArgumentParser(
            prog="media-cutter",
            description="Trim, filter, normalize and denoise media files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Keep 1:05 to 1:10 of a recording with a band-pass filter
  media-cutter process talk.mp4 talk-cut.mp4 --from 65 --to 70 --high-pass 200 --low-pass 3000

  # Listen to the result first
  media-cutter preview talk.mp4 --from 65 --to 70 --normalize

  # Remove background noise using a sample of silence
  media-cutter process talk.wav clean.wav --to 300 --noise-profile hiss.wav --noise-amount 0.21

  # Check that ffmpeg, ffplay and sox are installed
  media-cutter info
            """,
        )

        # Global options
        parser.add_argument(
            "-v",
            "--verbose",
            action="count",
            default=0,
            help="Increase verbosity (-v for info, -vv for debug)",
        )
        parser.add_argument("--config", type=Path, help="Path to configuration file")
        parser.add_argument("--encoder", help="Encoding program (default from config: ffmpeg)")
        parser.add_argument("--player", help="Playback program (default from config: ffplay)")
        parser.add_argument("--denoiser", help="Denoising program (default from config: sox)")
        parser.add_argument("--scratch-dir", type=Path, help="Root directory for intermediate files")

        subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")
        self.edit_commands.add_subcommands(subparsers)
        self.utility_commands.add_subcommands(subparsers)

        return parser

    @staticmethod
    def create_run_options(args: argparse.Namespace) -> RunOptions:
        """Create run options from CLI arguments."""
        return RunOptions(
            encoder=getattr(args, "encoder", None),
            player=getattr(args, "player", None),
            denoiser=getattr(args, "denoiser", None),
            scratch_root=getattr(args, "scratch_dir", None),
        )

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parser = self.build_parser()
        parsed_args = parser.parse_args(args)

        # Update config manager if custom config provided
        if getattr(parsed_args, "config", None):
            self.config_manager = ConfigManager(parsed_args.config)
            self.edit_commands.config_manager = self.config_manager
            self.utility_commands.config_manager = self.config_manager

        self.setup_logging(parsed_args.verbose)

        try:
            run_options = self.create_run_options(parsed_args)
            with with_config_overrides(self.config_manager, run_options.to_overrides()):
                if parsed_args.command in EditCommands.COMMANDS:
                    return self.edit_commands.handle_command(parsed_args)
                if parsed_args.command in UtilityCommands.COMMANDS:
                    return self.utility_commands.handle_command(parsed_args)
                parser.error(f"Unknown command: {parsed_args.command}")

        except KeyboardInterrupt:
            logging.getLogger(__name__).info("Operation cancelled by user")
            return EXIT_INTERRUPTED
        except Exception as e:
            logging.getLogger(__name__).exception("Unexpected error: %s", e)
            return EXIT_FAILURE

        return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    cli = MediaCutterCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
