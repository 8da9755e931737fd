"""Sequencing of the conditional processing stages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config.settings import ToolsConfig
from .arguments import (
    build_final_args,
    build_noise_clean_args,
    build_noise_profile_args,
    build_volume_detect_args,
)
from .base import FilesystemError, PipelineError
from .output_parser import extract_max_volume
from .process import ProcessRunner
from .request import PipelineState
from .scratch import TemporaryArtifactManager

if TYPE_CHECKING:
    from collections.abc import Callable

    from .config import ConfigManager
    from .request import EditRequest
    from .scratch import ScratchHandle

LOG = logging.getLogger(__name__)

STAGE_NOISE_REDUCTION = "noise reduction"
STAGE_VOLUME_DETECT = "volume detection"
STAGE_ENCODE = "encode"
STAGE_PREVIEW = "preview"
STAGE_CLEANUP = "cleanup"


class PipelineOrchestrator:
    """
    Runs the stages for one request in a fixed order.

    1. noise reduction, when both noise fields are set
    2. volume detection, when peak normalization is requested
    3. encode or preview, always
    4. scratch cleanup, when stage 1 ran

    The first failing stage aborts the run. A scratch file left by an
    aborted run is removed on a best-effort basis.
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        artifacts: TemporaryArtifactManager | None = None,
        tools: ToolsConfig | None = None,
        progress_callback: Callable[[str], None] | None = None,
    ) -> None:
        self.runner = runner or ProcessRunner()
        self.artifacts = artifacts or TemporaryArtifactManager()
        self.tools = tools or ToolsConfig()
        self.progress_callback = progress_callback

    @classmethod
    def from_config(
        cls,
        config_manager: ConfigManager,
        progress_callback: Callable[[str], None] | None = None,
    ) -> PipelineOrchestrator:
        """Create an orchestrator from configuration values and their overrides."""
        tools = ToolsConfig(
            encoder=str(config_manager.get_value("tools.encoder")),
            player=str(config_manager.get_value("tools.player")),
            denoiser=str(config_manager.get_value("tools.denoiser")),
        )
        artifacts = TemporaryArtifactManager(
            root=config_manager.get_value("scratch.root"),
            subdirectory=str(config_manager.get_value("scratch.subdirectory")),
        )
        runner = ProcessRunner(cancel_grace_seconds=float(config_manager.get_value("global_.cancel_grace_seconds")))
        return cls(runner=runner, artifacts=artifacts, tools=tools, progress_callback=progress_callback)

    @staticmethod
    def planned_stages(request: EditRequest) -> list[str]:
        """Names of the stages a run of this request will go through."""
        stages = []
        if request.noise_reduction_enabled:
            stages.append(STAGE_NOISE_REDUCTION)
        if request.peak_normalize:
            stages.append(STAGE_VOLUME_DETECT)
        stages.append(STAGE_PREVIEW if request.preview else STAGE_ENCODE)
        if request.noise_reduction_enabled:
            stages.append(STAGE_CLEANUP)
        return stages

    def run(self, request: EditRequest) -> None:
        """
        Execute every stage the request needs.

        Raises:
            PipelineError: The error of the first stage that failed

        """
        state = PipelineState()
        succeeded = False
        try:
            if request.noise_reduction_enabled:
                self._reduce_noise(request, state)
            if request.peak_normalize:
                self._detect_max_volume(request, state)
            self._render(request, state)
            succeeded = True
        finally:
            if not succeeded and state.scratch is not None:
                self._discard(state.scratch)

        if state.scratch is not None:
            self._notify(STAGE_CLEANUP)
            state.scratch.remove()

    def cancel(self) -> None:
        """Terminate the running stage; ``run`` then raises Cancelled."""
        self.runner.cancel()

    def _notify(self, stage: str) -> None:
        LOG.info("Stage: %s", stage)
        if self.progress_callback is not None:
            self.progress_callback(stage)

    def _reduce_noise(self, request: EditRequest, state: PipelineState) -> None:
        self._notify(STAGE_NOISE_REDUCTION)
        handle = self.artifacts.handle_for(request.input_path)
        profile_args = build_noise_profile_args(request)
        clean_args = build_noise_clean_args(request, handle.path)

        self.artifacts.ensure_dir()
        try:
            self.runner.spawn_piped(
                (self.tools.denoiser, profile_args),
                (self.tools.denoiser, clean_args),
            )
        except PipelineError:
            self._discard(handle)
            raise

        state.scratch = handle
        state.trim_already_applied = True

    def _detect_max_volume(self, request: EditRequest, state: PipelineState) -> None:
        self._notify(STAGE_VOLUME_DETECT)
        invocation = self.runner.spawn(self.tools.encoder, build_volume_detect_args(request))

        max_volume = extract_max_volume(invocation.stderr)
        if max_volume is None:
            LOG.warning("No max_volume reported for %s, normalization has no effect", request.input_path)
            return
        LOG.info("Measured max volume: %.1f dB", max_volume)
        state.measured_max_volume_db = max_volume

    def _render(self, request: EditRequest, state: PipelineState) -> None:
        if request.preview:
            self._notify(STAGE_PREVIEW)
            program = self.tools.player
        else:
            self._notify(STAGE_ENCODE)
            program = self.tools.encoder
        self.runner.spawn(program, build_final_args(request, state), capture_stdout=False)

    @staticmethod
    def _discard(handle: ScratchHandle) -> None:
        if not handle.path.exists():
            return
        try:
            handle.remove()
        except FilesystemError as e:
            LOG.warning("Leaving scratch file behind: %s", e)


def run(request: EditRequest, orchestrator: PipelineOrchestrator | None = None) -> None:
    """Run the pipeline for ``request``, raising the first stage error."""
    (orchestrator or PipelineOrchestrator()).run(request)
