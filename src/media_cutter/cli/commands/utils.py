"""Utility CLI commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ... import __version__
from ...config.constants import EXIT_FAILURE
from ...core import TemporaryArtifactManager, check_availability

if TYPE_CHECKING:
    import argparse

    from ...core import ConfigManager

LOG = logging.getLogger(__name__)


class UtilityCommands:
    """Utility command handlers."""

    COMMANDS = ("info",)

    def __init__(self, config_manager: ConfigManager) -> None:
        """Initialize utility commands handler."""
        self.config_manager = config_manager

    def add_subcommands(self, subparsers: argparse._SubParsersAction) -> None:
        """Add utility subcommands."""
        subparsers.add_parser("info", help="Show configured programs and whether they are installed")

    def handle_command(self, args: argparse.Namespace) -> int:
        """Handle utility command execution."""
        if args.command == "info":
            return self._handle_info()
        LOG.error("Unknown utility command: %s", args.command)
        return EXIT_FAILURE

    def _handle_info(self) -> int:
        """Print configuration and program availability."""
        roles = {
            "encoder": str(self.config_manager.get_value("tools.encoder")),
            "player": str(self.config_manager.get_value("tools.player")),
            "denoiser": str(self.config_manager.get_value("tools.denoiser")),
        }
        found = check_availability(roles.values())

        artifacts = TemporaryArtifactManager(
            root=self.config_manager.get_value("scratch.root"),
            subdirectory=str(self.config_manager.get_value("scratch.subdirectory")),
        )

        print(f"\n=== MEDIA CUTTER {__version__} ===")
        for role, program in roles.items():
            location = found[program]
            status = f"✅ {location}" if location else "❌ not found in PATH"
            print(f"{role:<15}: {program:<10} {status}")
        print(f"{'scratch dir':<15}: {artifacts.directory}")

        return 0 if all(found.values()) else EXIT_FAILURE
