"""Tests for the command-line front-end."""

from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from media_cutter.cli.commands.edit import EditCommands
from media_cutter.cli.main import MediaCutterCLI
from media_cutter.core.base import NonZeroExit, PipelineOutcome, ProcessingStatus
from media_cutter.core.request import build_request


@pytest.fixture
def cli(tmp_path: Path) -> MediaCutterCLI:
    """CLI reading an empty config file so local config.yaml files do not leak in."""
    config = tmp_path / "config.yaml"
    config.write_text("", encoding="utf-8")
    return MediaCutterCLI(config)


def _parse(cli: MediaCutterCLI, argv: list[str]):
    return cli.build_parser().parse_args(argv)


def test_process_arguments_build_request(cli: MediaCutterCLI) -> None:
    args = _parse(
        cli,
        [
            "process",
            "in.mp4",
            "out.mp4",
            "--from",
            "65",
            "--to",
            "70",
            "--high-pass",
            "200",
            "--low-pass",
            "3000",
            "--normalize",
            "--volume",
            "-2",
            "-y",
        ],
    )

    request = EditCommands.build_request_from_args(args)

    assert request.input_path == "in.mp4"
    assert request.output_path == "out.mp4"
    assert request.from_time == timedelta(seconds=65)
    assert request.duration == timedelta(seconds=5)
    assert request.high_pass_hz == 200
    assert request.low_pass_hz == 3000
    assert request.peak_normalize
    assert request.volume_change_db == -2.0
    assert request.allow_overwrite
    assert not request.preview


def test_preview_arguments_build_request(cli: MediaCutterCLI) -> None:
    args = _parse(cli, ["preview", "in.mp4", "--to", "3", "--no-video"])

    request = EditCommands.build_request_from_args(args)

    assert request.preview
    assert request.output_path == ""
    assert request.ignore_video
    assert not request.allow_overwrite


def test_half_configured_noise_reduction_is_skipped(cli: MediaCutterCLI) -> None:
    args = _parse(cli, ["process", "in.wav", "out.wav", "--to", "3", "--noise-profile", "hiss.wav"])

    request = EditCommands.build_request_from_args(args)

    assert request.noise_profile_path is None
    assert not request.noise_reduction_enabled


def test_process_success_exit_code(cli: MediaCutterCLI) -> None:
    request = build_request("in.mp4", "out.mp4", to_time=5)
    outcome = PipelineOutcome(request=request, status=ProcessingStatus.SUCCESS, message="Operation succeeded!")

    with patch("media_cutter.cli.commands.edit.PipelineTask") as mock_task_class:
        mock_task_class.return_value.result.return_value = outcome
        code = cli.run(["process", "in.mp4", "out.mp4", "--to", "5"])

    assert code == 0
    mock_task_class.return_value.start.assert_called_once()


def test_process_failure_prints_report(cli: MediaCutterCLI, capsys: pytest.CaptureFixture[str]) -> None:
    """Failures exit with 1 and show the command line and stderr."""
    request = build_request("in.mp4", "out.mp4", to_time=5)
    error = NonZeroExit("ffmpeg", ["-i", "in.mp4"], 1, "in.mp4: No such file or directory")
    outcome = PipelineOutcome(request=request, status=ProcessingStatus.FAILED, message=error.message, error=error)

    with patch("media_cutter.cli.commands.edit.PipelineTask") as mock_task_class:
        mock_task_class.return_value.result.return_value = outcome
        code = cli.run(["process", "in.mp4", "out.mp4", "--to", "5"])

    assert code == 1
    output = capsys.readouterr().out
    assert 'ffmpeg "-i" "in.mp4"' in output
    assert "Exit code   : 1" in output
    assert "No such file or directory" in output


def test_invalid_window_is_rejected_without_running(cli: MediaCutterCLI) -> None:
    with patch("media_cutter.cli.commands.edit.PipelineTask") as mock_task_class:
        code = cli.run(["process", "in.mp4", "out.mp4", "--from", "10", "--to", "5"])

    assert code == 1
    mock_task_class.assert_not_called()


def test_negative_start_is_rejected_without_running(cli: MediaCutterCLI) -> None:
    with patch("media_cutter.cli.commands.edit.PipelineTask") as mock_task_class:
        code = cli.run(["process", "in.mp4", "out.mp4", "--from", "-1", "--to", "5"])

    assert code == 1
    mock_task_class.assert_not_called()


def test_cancelled_run_exit_code(cli: MediaCutterCLI) -> None:
    request = build_request("in.mp4", "out.mp4", to_time=5)
    outcome = PipelineOutcome(request=request, status=ProcessingStatus.CANCELLED)

    with patch("media_cutter.cli.commands.edit.PipelineTask") as mock_task_class:
        mock_task_class.return_value.result.side_effect = [KeyboardInterrupt, outcome]
        code = cli.run(["preview", "in.mp4", "--to", "5"])

    assert code == 130
    mock_task_class.return_value.cancel.assert_called_once()


def test_program_overrides_reach_orchestrator(cli: MediaCutterCLI) -> None:
    request = build_request("in.mp4", "out.mp4", to_time=5)
    outcome = PipelineOutcome(request=request, status=ProcessingStatus.SUCCESS)

    with patch("media_cutter.cli.commands.edit.PipelineTask") as mock_task_class:
        mock_task_class.return_value.result.return_value = outcome
        cli.run(["--encoder", "/opt/ffmpeg", "process", "in.mp4", "out.mp4", "--to", "5"])

    orchestrator = mock_task_class.call_args.args[1]
    assert orchestrator.tools.encoder == "/opt/ffmpeg"
    assert orchestrator.tools.player == "ffplay"
    assert cli.config_manager.overrides == {}
    assert cli.config_manager.get_value("tools.encoder") == "ffmpeg"


def test_info_reports_missing_programs(cli: MediaCutterCLI, capsys: pytest.CaptureFixture[str]) -> None:
    found = {"ffmpeg": "/usr/bin/ffmpeg", "ffplay": "/usr/bin/ffplay", "sox": None}

    with patch("media_cutter.cli.commands.utils.check_availability", return_value=found):
        code = cli.run(["info"])

    assert code == 1
    output = capsys.readouterr().out
    assert "/usr/bin/ffmpeg" in output
    assert "not found in PATH" in output
