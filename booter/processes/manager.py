"""ProcessOrchestrator — boots every sub-project and multiplexes its output.

Each child gets a private output channel: two reader tasks push tagged
stdout/stderr chunks into a queue in delivery order, followed by the exit
outcome once the child terminates. One handler task per child drains that
queue, appending to the child's log file and mirroring to the console.

The orchestrator never stops a child. It only observes them until they exit.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from booter.exceptions import LaunchResolutionError
from booter.processes.launch import resolve_launch_spec
from booter.reporter import Reporter
from booter.types import (
    ExitOutcome,
    ManagedProcess,
    ManifestLocation,
    OutputChunk,
    ProcessState,
    StreamKind,
)

_logger = logging.getLogger(__name__)

_READ_SIZE = 64 * 1024
_ERROR_PREFIX = b"ERROR: "
_DRAIN_SECONDS = 0.5
_POLL_SECONDS = 0.1


class ProcessOrchestrator:
    """Spawns one long-running child per manifest and tracks it to exit."""

    def __init__(
        self,
        logs_dir: Path,
        run_command: list[str],
        reporter: Reporter,
    ) -> None:
        self._logs_dir = logs_dir
        self._run_command = list(run_command)
        self._reporter = reporter
        self._processes: list[ManagedProcess] = []
        self._handler_tasks: list[asyncio.Task] = []
        self._reader_tasks: list[asyncio.Task] = []

    @property
    def processes(self) -> list[ManagedProcess]:
        return list(self._processes)

    async def boot_all(self, locations: Iterable[ManifestLocation]) -> list[ManagedProcess]:
        """Launch every project back-to-back without waiting on any of them."""
        return [await self.launch(location) for location in locations]

    async def launch(self, location: ManifestLocation) -> ManagedProcess:
        """Resolve and spawn one project. Failures here only affect this project."""
        managed = ManagedProcess(location=location)
        self._processes.append(managed)

        try:
            spec = resolve_launch_spec(location, self._run_command)
        except LaunchResolutionError as e:
            managed.state = ProcessState.FAILED
            managed.error = str(e)
            self._reporter.error(str(e))
            return managed

        managed.spec = spec
        managed.name = spec.project_name
        managed.log_path = self._logs_dir / location.log_name
        self._reporter.info(f"Booting project in {spec.workdir}")

        try:
            managed.log_handle = open(managed.log_path, "ab")
            proc = await asyncio.create_subprocess_exec(
                *spec.command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=spec.workdir,
            )
        except OSError as e:
            managed.state = ProcessState.FAILED
            managed.error = f"Could not start {' '.join(spec.command)}: {e}"
            self._close_log(managed)
            self._reporter.error(f"{managed.name}:{managed.error}")
            return managed

        managed.os_pid = proc.pid
        managed.state = ProcessState.LAUNCHED
        _logger.info("Spawned %s (pid %d) in %s", spec.command, proc.pid, spec.workdir)

        channel: asyncio.Queue[OutputChunk | ExitOutcome] = asyncio.Queue()
        self._handler_tasks.append(
            asyncio.create_task(self._handle(managed, channel))
        )
        self._reader_tasks.append(
            asyncio.create_task(self._pump(proc, channel))
        )
        return managed

    async def _pump(
        self,
        proc: asyncio.subprocess.Process,
        channel: asyncio.Queue[OutputChunk | ExitOutcome],
    ) -> None:
        """Feed both output streams into the channel, then the exit outcome.

        The exit is reported when the child terminates, even if a grandchild
        still holds the pipes open. Readers get a short window after exit to
        deliver the child's remaining output first.
        """

        async def _read_stream(stream: asyncio.StreamReader, kind: StreamKind) -> None:
            while True:
                data = await stream.read(_READ_SIZE)
                if not data:
                    break
                await channel.put(OutputChunk(kind, data))

        readers = asyncio.gather(
            _read_stream(proc.stdout, StreamKind.STDOUT),
            _read_stream(proc.stderr, StreamKind.STDERR),
            return_exceptions=True,
        )
        try:
            returncode = await self._wait_for_exit(proc)
            try:
                await asyncio.wait_for(asyncio.shield(readers), timeout=_DRAIN_SECONDS)
            except asyncio.TimeoutError:
                _logger.debug("pid %d exited with its pipes still open", proc.pid)
            await channel.put(ExitOutcome(returncode))
        finally:
            readers.cancel()

    @staticmethod
    async def _wait_for_exit(proc: asyncio.subprocess.Process) -> int:
        # proc.wait() also waits for the pipes to close, which a grandchild
        # can hold open long after the child itself is gone.
        while proc.returncode is None:
            await asyncio.sleep(_POLL_SECONDS)
        return proc.returncode

    async def _handle(
        self,
        managed: ManagedProcess,
        channel: asyncio.Queue[OutputChunk | ExitOutcome],
    ) -> None:
        try:
            while True:
                item = await channel.get()
                if isinstance(item, ExitOutcome):
                    self._on_exit(managed, item)
                    return
                self._on_output(managed, item)
        finally:
            self._close_log(managed)

    def _on_output(self, managed: ManagedProcess, chunk: OutputChunk) -> None:
        managed.state = ProcessState.STREAMING
        if chunk.stream is StreamKind.STDERR:
            self._append_log(managed, _ERROR_PREFIX + chunk.data)
            self._reporter.error(f"{managed.name}:{chunk.text}")
        else:
            self._append_log(managed, chunk.data)
            self._reporter.info(f"{managed.name}:{chunk.text}")

    def _append_log(self, managed: ManagedProcess, data: bytes) -> None:
        try:
            managed.log_handle.write(data)
            managed.log_handle.flush()
        except OSError as e:
            self._reporter.error(f"{managed.name}:could not write {managed.log_path}: {e}")

    def _on_exit(self, managed: ManagedProcess, outcome: ExitOutcome) -> None:
        managed.state = ProcessState.EXITED
        managed.exit = outcome
        _logger.info("pid %s %s", managed.os_pid, outcome.describe())
        if outcome.succeeded:
            self._reporter.success(f"{managed.name} exited successfully")
        else:
            self._reporter.error(f"{managed.name} {outcome.describe()}")

    @staticmethod
    def _close_log(managed: ManagedProcess) -> None:
        if managed.log_handle is not None:
            try:
                managed.log_handle.close()
            except OSError as e:
                _logger.warning("Could not close %s: %s", managed.log_path, e)
            managed.log_handle = None

    async def wait(self) -> None:
        """Return once every launched child has exited and been fully logged."""
        if self._handler_tasks:
            results = await asyncio.gather(*self._handler_tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    _logger.error("Output handler failed: %s", result)

    async def shutdown(self) -> None:
        """Stop observing children and release log handles. Children keep running."""
        for task in (*self._reader_tasks, *self._handler_tasks):
            task.cancel()
        await asyncio.gather(
            *self._reader_tasks, *self._handler_tasks, return_exceptions=True
        )
        for managed in self._processes:
            self._close_log(managed)

    def list_processes(self) -> list[dict[str, Any]]:
        """Return the process table for the run summary."""
        result = []
        for managed in self._processes:
            result.append({
                "name": managed.name,
                "project": str(managed.location.project_root),
                "script": managed.spec.script if managed.spec else "",
                "state": managed.state.value,
                "os_pid": managed.os_pid,
                "exit": managed.exit.describe() if managed.exit else managed.error,
                "log": managed.log_path.name if managed.log_path else "",
            })
        return result
