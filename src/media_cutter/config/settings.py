"""Configuration management for media cutter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import (
    DEFAULT_CANCEL_GRACE_SECONDS,
    DEFAULT_DENOISER,
    DEFAULT_ENCODER,
    DEFAULT_PLAYER,
    DEFAULT_SCRATCH_SUBDIRECTORY,
)

LOG = logging.getLogger(__name__)


# Configuration singleton
class _ConfigSingleton:
    """Configuration singleton holder."""

    _instance: MediaCutterConfig | None = None

    @classmethod
    def get_instance(cls) -> MediaCutterConfig:
        """Get the configuration instance."""
        if cls._instance is None:
            config_path = Path.cwd() / "config.yaml"
            if config_path.exists():
                cls._instance = MediaCutterConfig.load_from_file(config_path)
            else:
                cls._instance = MediaCutterConfig()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the configuration instance."""
        cls._instance = None


_config_singleton = _ConfigSingleton()


@dataclass
class ToolsConfig:
    """Names or paths of the external programs."""

    encoder: str = DEFAULT_ENCODER
    player: str = DEFAULT_PLAYER
    denoiser: str = DEFAULT_DENOISER

    def all_programs(self) -> list[str]:
        return [self.encoder, self.player, self.denoiser]


@dataclass
class ScratchConfig:
    """Where intermediate audio is written."""

    root: Path | None = None  # None means the system temp directory
    subdirectory: str = DEFAULT_SCRATCH_SUBDIRECTORY


@dataclass
class GlobalConfig:
    """Global settings."""

    log_level: str = "WARNING"
    cancel_grace_seconds: float = DEFAULT_CANCEL_GRACE_SECONDS


@dataclass
class MediaCutterConfig:
    """Main configuration class."""

    tools: ToolsConfig = field(default_factory=ToolsConfig)
    scratch: ScratchConfig = field(default_factory=ScratchConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    @classmethod
    def load_from_file(cls, config_path: Path) -> MediaCutterConfig:
        """Load configuration from YAML file."""
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)

            return cls._from_dict(data or {})
        except (OSError, yaml.YAMLError, TypeError, ValueError, AttributeError) as e:
            LOG.warning("Failed to load config from %s: %s", config_path, e)
            return cls()

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> MediaCutterConfig:
        """Create config from dictionary."""
        return cls(
            tools=cls._parse_tools_config(data.get("tools") or {}),
            scratch=cls._parse_scratch_config(data.get("scratch") or {}),
            global_=cls._parse_global_config(data.get("global") or {}),
        )

    @classmethod
    def _parse_tools_config(cls, tools_data: dict[str, Any]) -> ToolsConfig:
        return ToolsConfig(
            encoder=str(tools_data.get("encoder", DEFAULT_ENCODER)),
            player=str(tools_data.get("player", DEFAULT_PLAYER)),
            denoiser=str(tools_data.get("denoiser", DEFAULT_DENOISER)),
        )

    @classmethod
    def _parse_scratch_config(cls, scratch_data: dict[str, Any]) -> ScratchConfig:
        root = scratch_data.get("root")
        return ScratchConfig(
            root=Path(root).expanduser() if root else None,
            subdirectory=str(scratch_data.get("subdirectory", DEFAULT_SCRATCH_SUBDIRECTORY)),
        )

    @classmethod
    def _parse_global_config(cls, global_data: dict[str, Any]) -> GlobalConfig:
        """Parse global configuration."""
        grace = global_data.get("cancel_grace_seconds", DEFAULT_CANCEL_GRACE_SECONDS)
        try:
            grace = float(grace)
        except (TypeError, ValueError):
            LOG.warning("Invalid cancel_grace_seconds '%s'. Using %.1f", grace, DEFAULT_CANCEL_GRACE_SECONDS)
            grace = DEFAULT_CANCEL_GRACE_SECONDS

        return GlobalConfig(
            log_level=str(global_data.get("log_level", "WARNING")).upper(),
            cancel_grace_seconds=grace,
        )


def get_config() -> MediaCutterConfig:
    """Get the global configuration instance."""
    return _config_singleton.get_instance()
