"""External program execution with structured error reporting."""

from __future__ import annotations

import contextlib
import logging
import shutil
import signal
import subprocess
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING

import psutil

from .base import Cancelled, NonZeroExit, SignalTerminated, SpawnError
from .formatting import render_args

if TYPE_CHECKING:
    from collections.abc import Iterable

LOG = logging.getLogger(__name__)

_SIGPIPE = getattr(signal, "SIGPIPE", None)


@dataclass
class ProcessInvocation:
    """One spawn of an external program and what it produced."""

    program: str
    args: list[str]
    returncode: int | None = None
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def command(self) -> list[str]:
        return [self.program, *self.args]

    @property
    def command_line(self) -> str:
        return f"{self.program} {render_args(self.args)}"


def check_availability(programs: Iterable[str]) -> dict[str, str | None]:
    """Map each program name to its resolved location on PATH, or None."""
    found = {program: shutil.which(program) for program in programs}
    missing = [program for program, location in found.items() if location is None]
    if missing:
        LOG.warning("Missing executables: %s", ", ".join(missing))
    return found


def _is_broken_pipe(returncode: int | None) -> bool:
    return _SIGPIPE is not None and returncode == -_SIGPIPE


class ProcessRunner:
    """
    Runs external programs and turns their failures into exceptions.

    Every call blocks until the spawned program(s) exit. ``cancel`` may be
    called from another thread: it terminates every live child together with
    its descendants and makes the blocked call raise Cancelled.
    """

    def __init__(self, cancel_grace_seconds: float = 5.0) -> None:
        self.cancel_grace_seconds = cancel_grace_seconds
        self._lock = threading.Lock()
        self._active: list[subprocess.Popen] = []
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def spawn(
        self,
        program: str,
        args: list[str],
        *,
        stdin: int | IO[bytes] | None = None,
        capture_stdout: bool = True,
    ) -> ProcessInvocation:
        """
        Run one program to completion.

        Args:
            program: Executable name or path
            args: Arguments, each passed as one argv entry
            stdin: Source for standard input, None to inherit the caller's
            capture_stdout: Capture stdout instead of inheriting it

        Returns:
            The finished invocation with captured output

        """
        invocation = ProcessInvocation(program, list(args))
        LOG.info("Running command: %s", invocation.command_line)
        start_time = time.time()

        proc = self._start(
            invocation,
            stdin=stdin,
            stdout=subprocess.PIPE if capture_stdout else None,
        )
        try:
            stdout, stderr = proc.communicate()
        finally:
            self._forget(proc)

        invocation.returncode = proc.returncode
        invocation.stdout = stdout or b""
        invocation.stderr = stderr or b""
        LOG.debug("%s completed in %.2fs with status %s", program, time.time() - start_time, proc.returncode)

        self._check(invocation)
        return invocation

    def spawn_piped(
        self,
        producer: tuple[str, list[str]],
        consumer: tuple[str, list[str]],
    ) -> tuple[ProcessInvocation, ProcessInvocation]:
        """
        Run two programs concurrently with the producer's stdout feeding the consumer's stdin.

        Both are waited for. A failure of either one is raised; when the
        consumer failed and the producer then died of a broken pipe, the
        consumer's failure is the one reported.
        """
        upstream = ProcessInvocation(producer[0], list(producer[1]))
        downstream = ProcessInvocation(consumer[0], list(consumer[1]))
        LOG.info("Running piped commands: %s | %s", upstream.command_line, downstream.command_line)

        first = self._start(upstream, stdin=subprocess.DEVNULL, stdout=subprocess.PIPE)
        try:
            second = self._start(downstream, stdin=first.stdout, stdout=subprocess.PIPE)
        except Exception:
            first.kill()
            first.communicate()
            self._forget(first)
            raise

        # The consumer holds the read end now; the producer must see EPIPE once it exits.
        first.stdout.close()
        try:
            with ThreadPoolExecutor(max_workers=1) as pool:
                upstream_stderr = pool.submit(first.stderr.read)
                stdout, stderr = second.communicate()
                upstream.stderr = upstream_stderr.result() or b""
            first.stderr.close()
            first.wait()
        finally:
            self._forget(first)
            self._forget(second)

        upstream.returncode = first.returncode
        downstream.returncode = second.returncode
        downstream.stdout = stdout or b""
        downstream.stderr = stderr or b""
        LOG.debug("Piped commands finished with status %s | %s", first.returncode, second.returncode)

        order = [upstream, downstream]
        if _is_broken_pipe(upstream.returncode) and downstream.returncode != 0:
            order.reverse()
        for invocation in order:
            self._check(invocation)
        return upstream, downstream

    def cancel(self) -> None:
        """Terminate all live children and make pending calls raise Cancelled."""
        self._cancelled.set()
        with self._lock:
            procs = list(self._active)
        LOG.info("Cancelling %d running process(es)", len(procs))
        for proc in procs:
            self._terminate_tree(proc)

    def _start(
        self,
        invocation: ProcessInvocation,
        *,
        stdin: int | IO[bytes] | None,
        stdout: int | None,
    ) -> subprocess.Popen:
        if self.cancelled:
            raise Cancelled

        try:
            proc = subprocess.Popen(  # noqa: S603
                invocation.command,
                stdin=stdin,
                stdout=stdout,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            LOG.debug("Failed to start %s: %s", invocation.program, e)
            raise SpawnError(invocation.program, invocation.args, e) from e

        with self._lock:
            self._active.append(proc)
        if self.cancelled:
            self._terminate_tree(proc)
        return proc

    def _forget(self, proc: subprocess.Popen) -> None:
        with self._lock:
            if proc in self._active:
                self._active.remove(proc)

    def _check(self, invocation: ProcessInvocation) -> None:
        # children reaped during cancellation report an unreliable status
        if self.cancelled:
            raise Cancelled

        code = invocation.returncode
        if code == 0:
            return
        if code is None or code < 0:
            raise SignalTerminated(invocation.program, invocation.args, None if code is None else -code)

        stderr = invocation.stderr.decode("utf-8", errors="replace").strip()
        raise NonZeroExit(invocation.program, invocation.args, code, stderr)

    def _terminate_tree(self, proc: subprocess.Popen) -> None:
        try:
            parent = psutil.Process(proc.pid)
            family = [*parent.children(recursive=True), parent]
        except psutil.NoSuchProcess:
            return

        for member in family:
            with contextlib.suppress(psutil.NoSuchProcess):
                member.terminate()

        _, alive = psutil.wait_procs(family, timeout=self.cancel_grace_seconds)
        for member in alive:
            LOG.warning("Process %d ignored termination, killing it", member.pid)
            with contextlib.suppress(psutil.NoSuchProcess):
                member.kill()
