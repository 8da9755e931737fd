"""CLI command modules."""

from .edit import EditCommands
from .utils import UtilityCommands

__all__ = ["EditCommands", "UtilityCommands"]
