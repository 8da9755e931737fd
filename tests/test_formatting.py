"""Tests for duration formatting and argument rendering."""

from datetime import timedelta

import pytest

from media_cutter.core.formatting import format_duration, format_number, render_args


@pytest.mark.parametrize(
    ("milliseconds", "expected"),
    [
        (1002, "0:0:1.2"),
        (65125, "0:1:5.125"),
        (6065125, "1:41:5.125"),
        (128000, "0:2:8.0"),
        (0, "0:0:0.0"),
    ],
)
def test_format_duration(milliseconds: int, expected: str) -> None:
    """Durations render as unpadded H:M:S.mmm."""
    assert format_duration(timedelta(milliseconds=milliseconds)) == expected


def test_format_duration_truncates_sub_millisecond() -> None:
    """Microseconds below one millisecond are dropped, not rounded."""
    assert format_duration(timedelta(microseconds=1999)) == "0:0:0.1"


def test_format_duration_rejects_negative() -> None:
    """A negative trim window is a programming error."""
    with pytest.raises(ValueError, match="negative"):
        format_duration(timedelta(seconds=-1))


def test_render_args() -> None:
    """Arguments are quoted and joined by single spaces."""
    assert render_args(["-l", "-h", "a/path"]) == '"-l" "-h" "a/path"'


def test_render_args_empty() -> None:
    assert render_args([]) == ""


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.0, "0"), (-3.0, "-3"), (3.5, "3.5"), (-2.25, "-2.25"), (0.21, "0.21")],
)
def test_format_number(value: float, expected: str) -> None:
    """Whole numbers drop the decimal part, others keep it."""
    assert format_number(value) == expected
