"""Running a pipeline off the calling thread with cancellation."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

from .base import Cancelled, PipelineError, PipelineOutcome, ProcessingStatus
from .pipeline import PipelineOrchestrator

if TYPE_CHECKING:
    from .request import EditRequest

LOG = logging.getLogger(__name__)


class PipelineTask:
    """A single pipeline run dispatched to a worker thread."""

    def __init__(self, request: EditRequest, orchestrator: PipelineOrchestrator | None = None) -> None:
        self.request = request
        self.orchestrator = orchestrator or PipelineOrchestrator()
        self._executor: ThreadPoolExecutor | None = None
        self._future: Future[PipelineOutcome] | None = None

    @property
    def future(self) -> Future[PipelineOutcome] | None:
        return self._future

    def start(self) -> Future[PipelineOutcome]:
        """Submit the run and return a future resolving to its outcome."""
        if self._future is not None:
            return self._future

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="media-cutter")
        self._future = self._executor.submit(self._execute)
        # no further work is queued, let the worker exit once the run ends
        self._executor.shutdown(wait=False)
        return self._future

    def cancel(self) -> None:
        """Terminate running programs; the outcome becomes CANCELLED."""
        LOG.info("Cancellation requested for %s", self.request.input_path)
        self.orchestrator.cancel()

    def result(self, timeout: float | None = None) -> PipelineOutcome:
        """Block until the run ends and return its outcome."""
        return self.start().result(timeout=timeout)

    def _execute(self) -> PipelineOutcome:
        start_time = time.time()
        try:
            self.orchestrator.run(self.request)
        except Cancelled as e:
            return PipelineOutcome(
                request=self.request,
                status=ProcessingStatus.CANCELLED,
                message=e.message,
                error=e,
                processing_time=time.time() - start_time,
            )
        except PipelineError as e:
            LOG.debug("Pipeline failed: %s", e.message)
            return PipelineOutcome(
                request=self.request,
                status=ProcessingStatus.FAILED,
                message=e.message,
                error=e,
                processing_time=time.time() - start_time,
            )

        return PipelineOutcome(
            request=self.request,
            status=ProcessingStatus.SUCCESS,
            message="Operation succeeded!",
            processing_time=time.time() - start_time,
        )


def run_in_background(request: EditRequest, orchestrator: PipelineOrchestrator | None = None) -> PipelineTask:
    """Start a pipeline run on a worker thread and return its task."""
    task = PipelineTask(request, orchestrator)
    task.start()
    return task
