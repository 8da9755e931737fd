"""Tests for request construction and validation."""

from datetime import timedelta
from pathlib import Path

import pytest

from media_cutter.core.base import ValidationError
from media_cutter.core.request import EditRequest, PipelineState, build_request
from media_cutter.core.scratch import ScratchHandle


def test_build_request_converts_seconds_and_paths() -> None:
    request = build_request(Path("in.mp4"), Path("out.mp4"), from_time=1.5, to_time=4)

    assert request.input_path == "in.mp4"
    assert request.output_path == "out.mp4"
    assert request.from_time == timedelta(seconds=1.5)
    assert request.duration == timedelta(seconds=2.5)


def test_end_before_start_is_rejected() -> None:
    with pytest.raises(ValidationError, match="before start"):
        build_request("in.mp4", "out.mp4", from_time=10, to_time=5)


def test_negative_start_is_rejected() -> None:
    """A window starting before zero cannot be formatted for ffmpeg or sox."""
    with pytest.raises(ValidationError, match="negative"):
        build_request("in.mp4", "out.mp4", from_time=-5, to_time=5)


@pytest.mark.parametrize("field", ["high_pass_hz", "low_pass_hz"])
def test_non_positive_frequency_is_rejected(field: str) -> None:
    with pytest.raises(ValidationError, match="must be positive"):
        build_request("in.mp4", "out.mp4", to_time=1, **{field: 0})


def test_request_is_immutable() -> None:
    request = EditRequest(input_path="in.mp4")

    with pytest.raises(AttributeError):
        request.input_path = "other.mp4"  # type: ignore[misc]


def test_noise_reduction_needs_both_fields() -> None:
    assert not build_request("a", "b", noise_profile_path="n.wav").noise_reduction_enabled
    assert not build_request("a", "b", noise_reduction_amount=0.2).noise_reduction_enabled
    assert build_request("a", "b", noise_profile_path="", noise_reduction_amount=0.2).noise_reduction_enabled


def test_check_paths_lists_every_missing_path() -> None:
    """Missing input and output are reported together."""
    with pytest.raises(ValidationError) as exc_info:
        EditRequest().check_paths()

    assert exc_info.value.message == "No input file specified\nNo output file specified"


def test_check_paths_preview_needs_no_output() -> None:
    EditRequest(input_path="in.mp4", preview=True).check_paths()


def test_state_intermediate_path(tmp_path: Path) -> None:
    state = PipelineState()
    assert state.intermediate_audio_path is None

    state.scratch = ScratchHandle(tmp_path / "a.wav")
    assert state.intermediate_audio_path == str(tmp_path / "a.wav")
