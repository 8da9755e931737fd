"""Argument lists for every external program the pipeline runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ValidationError
from .formatting import format_duration, format_number

if TYPE_CHECKING:
    from pathlib import Path

    from .request import EditRequest, PipelineState


def _trim_window(request: EditRequest) -> list[str]:
    return ["-ss", format_duration(request.from_time), "-t", format_duration(request.duration)]


def build_noise_profile_args(request: EditRequest) -> list[str]:
    """Build sox arguments writing a noise profile of the sample to stdout."""
    if not request.noise_profile_path:
        msg = "No noise sample file specified"
        raise ValidationError(msg)
    return [request.noise_profile_path, "-n", "noiseprof"]


def build_noise_clean_args(request: EditRequest, scratch_path: Path | str) -> list[str]:
    """Build sox arguments trimming the input and reducing noise with a profile read from stdin."""
    if request.noise_reduction_amount is None:
        msg = "No noise reduction amount specified"
        raise ValidationError(msg)
    return [
        request.input_path,
        str(scratch_path),
        "trim",
        format_duration(request.from_time),
        format_duration(request.duration),
        "noisered",
        "-",
        format_number(request.noise_reduction_amount),
    ]


def build_volume_detect_args(request: EditRequest) -> list[str]:
    """Build ffmpeg arguments that only measure the volume of the trim window."""
    return [
        "-nostdin",
        "-i",
        request.input_path,
        "-vn",
        *_trim_window(request),
        "-filter:a",
        "volumedetect",
        # no output file
        "-f",
        "null",
        "-",
    ]


def build_filter_chain(request: EditRequest, state: PipelineState) -> str:
    """Join high-pass, low-pass and gain filters into one ``-af`` value."""
    filters = []
    if request.high_pass_hz is not None:
        filters.append(f"highpass=f={request.high_pass_hz}")
    if request.low_pass_hz is not None:
        filters.append(f"lowpass=f={request.low_pass_hz}")

    gain = request.volume_change_db
    if state.measured_max_volume_db is not None:
        gain -= state.measured_max_volume_db
    filters.append(f"volume={format_number(gain)}dB")

    return ",".join(filters)


def build_final_args(request: EditRequest, state: PipelineState) -> list[str]:
    """Build the encode (or preview) arguments for the last stage."""
    args = []

    if not request.preview:
        args.append("-y" if request.allow_overwrite else "-nostdin")

    args.extend(["-i", state.intermediate_audio_path or request.input_path])

    if request.ignore_video:
        args.append("-vn")
    if request.ignore_audio:
        args.append("-an")

    if not state.trim_already_applied:
        args.extend(_trim_window(request))

    # -af is an alias of -filter:a for ffmpeg, and the only spelling ffplay accepts
    args.extend(["-af", build_filter_chain(request, state)])

    if not request.preview:
        args.append(request.output_path)

    return args
