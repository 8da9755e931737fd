"""CLI module for media cutter."""

from .commands import EditCommands, UtilityCommands
from .main import MediaCutterCLI

__all__ = [
    "EditCommands",
    "MediaCutterCLI",
    "UtilityCommands",
]
