"""Configuration access with per-invocation overrides."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..config import MediaCutterConfig
from ..config import get_config as _get_global_config

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

LOG = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class RunOptions:
    """Command-line options that can override configuration."""

    encoder: str | None = None
    player: str | None = None
    denoiser: str | None = None
    scratch_root: Path | None = None

    def to_overrides(self) -> dict[str, Any]:
        """Dotted configuration keys for every option that was given."""
        candidates = {
            "tools.encoder": self.encoder,
            "tools.player": self.player,
            "tools.denoiser": self.denoiser,
            "scratch.root": self.scratch_root,
        }
        return {key: value for key, value in candidates.items() if value is not None}


class ConfigManager:
    """YAML configuration plus a layer of dotted-key overrides."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config = MediaCutterConfig.load_from_file(config_path) if config_path else _get_global_config()
        self._overrides: dict[str, Any] = {}

    @property
    def config(self) -> MediaCutterConfig:
        return self._config

    @property
    def overrides(self) -> dict[str, Any]:
        """Copy of the overrides currently in effect."""
        return dict(self._overrides)

    def _lookup(self, key_path: str) -> object:
        value: object = self._config
        for part in key_path.split("."):
            value = getattr(value, part, _MISSING)
            if value is _MISSING:
                break
        return value

    def get_value(self, key_path: str, default: object = None) -> object:
        """
        Resolve ``key_path`` such as ``tools.encoder``.

        An override wins over the loaded configuration; unknown keys give
        ``default``.
        """
        if key_path in self._overrides:
            return self._overrides[key_path]
        value = self._lookup(key_path)
        return default if value is _MISSING else value

    def set_override(self, key_path: str, value: object) -> None:
        """Override ``key_path`` until cleared or until the enclosing context ends."""
        if self._lookup(key_path) is _MISSING:
            msg = f"Unknown configuration key: {key_path}"
            raise KeyError(msg)
        LOG.debug("Config override %s = %s", key_path, value)
        self._overrides[key_path] = value

    def reset_overrides(self, overrides: Mapping[str, object] | None = None) -> None:
        """Replace every override with ``overrides``, or drop them all."""
        self._overrides = dict(overrides or {})


@contextmanager
def with_config_overrides(config_manager: ConfigManager, overrides: Mapping[str, object]) -> Iterator[ConfigManager]:
    """
    Apply ``overrides`` for the duration of a ``with`` block.

    Overrides already in effect are restored on exit, also when the block
    raises.
    """
    saved = config_manager.overrides
    try:
        for key_path, value in overrides.items():
            config_manager.set_override(key_path, value)
        yield config_manager
    finally:
        config_manager.reset_overrides(saved)
