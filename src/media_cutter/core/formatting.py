"""Text formatting shared by argument builders and error messages."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE


def format_duration(duration: timedelta) -> str:
    """
    Format a duration as ``H:M:S.mmm`` for ffmpeg and sox.

    Every unit is truncated, nothing is zero padded and the milliseconds are
    written as a bare integer, so 1002 ms becomes ``0:0:1.2``.
    """
    total_ms = duration // timedelta(milliseconds=1)
    if total_ms < 0:
        msg = f"Cannot format negative duration: {duration}"
        raise ValueError(msg)

    hours = total_ms // MS_PER_HOUR
    minutes = total_ms // MS_PER_MINUTE - hours * 60
    seconds = total_ms // MS_PER_SECOND - (total_ms // MS_PER_MINUTE) * 60
    millis = total_ms - (total_ms // MS_PER_SECOND) * MS_PER_SECOND
    return f"{hours}:{minutes}:{seconds}.{millis}"


def render_args(args: Iterable[str]) -> str:
    """Render arguments double-quoted and space-joined for diagnostics."""
    return " ".join(f'"{arg}"' for arg in args)


def format_number(value: float) -> str:
    """Format a number without a trailing ``.0`` for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
