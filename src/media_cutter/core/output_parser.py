"""Parsing of measurements from program diagnostic output."""

from __future__ import annotations

import logging
import re

from .base import DecodeError

LOG = logging.getLogger(__name__)

MAX_VOLUME_RE = re.compile(r"max_volume:\s*(?P<max>[-+]?(?:\d+\.?\d*|\.\d+))\s*dB", re.IGNORECASE)


def decode_diagnostics(raw: bytes | str) -> str:
    """Decode captured program output, rejecting invalid UTF-8."""
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"Diagnostic output is not valid UTF-8 at byte {e.start}: {e.reason}"
        raise DecodeError(msg, position=e.start, cause=e) from e


def extract_max_volume(text: bytes | str) -> float | None:
    """
    Find the first ``max_volume: <number> dB`` report of ffmpeg's volumedetect.

    Returns:
        The maximum volume in dB, or None when the output has no report.

    Raises:
        DecodeError: If ``text`` is bytes that are not valid UTF-8.

    """
    match = MAX_VOLUME_RE.search(decode_diagnostics(text))
    if match is None:
        LOG.debug("No max_volume report found in diagnostic output")
        return None
    return float(match.group("max"))
