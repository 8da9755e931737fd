"""Edit request model and per-run pipeline state."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from .base import ValidationError

if TYPE_CHECKING:
    from .scratch import ScratchHandle

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditRequest:
    """What to do with one media file. Read-only for the whole run."""

    input_path: str = ""
    output_path: str = ""
    from_time: timedelta = timedelta(0)
    to_time: timedelta = timedelta(0)
    preview: bool = False
    allow_overwrite: bool = False
    ignore_video: bool = False
    ignore_audio: bool = False
    high_pass_hz: int | None = None
    low_pass_hz: int | None = None
    peak_normalize: bool = False
    volume_change_db: float = 0.0
    noise_profile_path: str | None = None
    noise_reduction_amount: float | None = None

    def __post_init__(self) -> None:
        """Reject requests that can never produce a valid run."""
        if self.from_time < timedelta(0):
            msg = f"Start time {self.from_time} is negative"
            raise ValidationError(msg)
        if self.to_time < self.from_time:
            msg = f"End time {self.to_time} is before start time {self.from_time}"
            raise ValidationError(msg)
        for label, freq in (("High-pass", self.high_pass_hz), ("Low-pass", self.low_pass_hz)):
            if freq is not None and freq <= 0:
                msg = f"{label} frequency must be positive, got {freq}"
                raise ValidationError(msg)

    @property
    def duration(self) -> timedelta:
        """Length of the trim window."""
        return self.to_time - self.from_time

    @property
    def noise_reduction_enabled(self) -> bool:
        return self.noise_profile_path is not None and self.noise_reduction_amount is not None

    def check_paths(self) -> None:
        """Raise one ValidationError listing every missing path."""
        errors = []
        if not self.input_path:
            errors.append("No input file specified")
        if not self.preview and not self.output_path:
            errors.append("No output file specified")
        if errors:
            raise ValidationError("\n".join(errors))


def _as_timedelta(value: timedelta | float | None) -> timedelta:
    if value is None:
        return timedelta(0)
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


def _as_path(value: str | os.PathLike[str] | None) -> str | None:
    return None if value is None else os.fspath(value)


def build_request(  # noqa: PLR0913
    input_path: str | os.PathLike[str] = "",
    output_path: str | os.PathLike[str] = "",
    *,
    from_time: timedelta | float | None = None,
    to_time: timedelta | float | None = None,
    preview: bool = False,
    allow_overwrite: bool = False,
    ignore_video: bool = False,
    ignore_audio: bool = False,
    high_pass_hz: int | None = None,
    low_pass_hz: int | None = None,
    peak_normalize: bool = False,
    volume_change_db: float = 0.0,
    noise_profile_path: str | os.PathLike[str] | None = None,
    noise_reduction_amount: float | None = None,
) -> EditRequest:
    """
    Build an EditRequest from loosely typed front-end values.

    Times may be given as timedelta or as seconds. Paths may be str or
    path-like.
    """
    request = EditRequest(
        input_path=os.fspath(input_path),
        output_path=os.fspath(output_path),
        from_time=_as_timedelta(from_time),
        to_time=_as_timedelta(to_time),
        preview=preview,
        allow_overwrite=allow_overwrite,
        ignore_video=ignore_video,
        ignore_audio=ignore_audio,
        high_pass_hz=high_pass_hz,
        low_pass_hz=low_pass_hz,
        peak_normalize=peak_normalize,
        volume_change_db=float(volume_change_db),
        noise_profile_path=_as_path(noise_profile_path),
        noise_reduction_amount=noise_reduction_amount,
    )
    LOG.debug("Built request: %s", request)
    return request


@dataclass
class PipelineState:
    """Values threaded between stages of a single run."""

    measured_max_volume_db: float | None = None
    scratch: ScratchHandle | None = None
    trim_already_applied: bool = False

    @property
    def intermediate_audio_path(self) -> str | None:
        """Path later stages must read instead of the request input."""
        return None if self.scratch is None else str(self.scratch.path)
