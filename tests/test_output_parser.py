"""Tests for max volume extraction."""

import pytest

from media_cutter.core.base import DecodeError
from media_cutter.core.output_parser import extract_max_volume

VOLUMEDETECT_STDERR = """\
[Parsed_volumedetect_0 @ 0x55d5c1a0] n_samples: 441000
[Parsed_volumedetect_0 @ 0x55d5c1a0] mean_volume: -27.3 dB
[Parsed_volumedetect_0 @ 0x55d5c1a0] max_volume: -4.8 dB
[Parsed_volumedetect_0 @ 0x55d5c1a0] histogram_4db: 12
"""


def test_extract_max_volume_from_ffmpeg_output() -> None:
    """The max_volume line is found among other volumedetect lines."""
    assert extract_max_volume(VOLUMEDETECT_STDERR) == pytest.approx(-4.8)


def test_extract_max_volume_from_bytes() -> None:
    assert extract_max_volume(VOLUMEDETECT_STDERR.encode()) == pytest.approx(-4.8)


def test_extract_max_volume_tolerates_spacing_and_case() -> None:
    assert extract_max_volume("MAX_VOLUME:   0.0dB") == 0.0
    assert extract_max_volume("max_volume:-12 dB") == -12.0


def test_extract_max_volume_first_match_wins() -> None:
    assert extract_max_volume("max_volume: -1.5 dB\nmax_volume: -9.0 dB") == pytest.approx(-1.5)


def test_extract_max_volume_without_report() -> None:
    """No report means no measurement, not an error."""
    assert extract_max_volume("Output file is empty, nothing was encoded") is None
    assert extract_max_volume(b"") is None


def test_extract_max_volume_rejects_invalid_utf8() -> None:
    """Undecodable output raises DecodeError with the byte offset."""
    with pytest.raises(DecodeError) as exc_info:
        extract_max_volume(b"max_volume: -1.0 dB \xff\xfe")

    assert exc_info.value.position == 20
