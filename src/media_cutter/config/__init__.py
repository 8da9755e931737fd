"""Configuration management for media cutter."""

from __future__ import annotations

from .constants import *  # noqa: F403, F401
from .settings import MediaCutterConfig, get_config

__all__ = [
    "MediaCutterConfig",
    "get_config",
]
