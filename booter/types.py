"""Core types shared across all booter subsystems."""

from __future__ import annotations

import signal
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import IO, Any

from pydantic import BaseModel, Field


# ── Manifests ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ManifestLocation:
    """Absolute path to one sub-project's manifest file."""

    path: Path

    @property
    def project_root(self) -> Path:
        return self.path.parent

    @property
    def log_name(self) -> str:
        # Sub-projects sharing a leaf directory name share a log file.
        return f"{self.project_root.name}.log"

    def __str__(self) -> str:
        return str(self.path)


class PackageManifest(BaseModel):
    """The parts of a package.json that booting cares about."""

    name: str | None = None
    scripts: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}

    def has_script(self, script: str) -> bool:
        return bool(self.scripts.get(script))


@dataclass(frozen=True)
class LaunchSpec:
    """A resolved, ready-to-spawn boot command for one sub-project."""

    script: str
    command: list[str]
    workdir: Path
    project_name: str = ""


# ── Process lifecycle ────────────────────────────────────────────────────────


class ProcessState(str, Enum):
    PENDING = "pending"
    LAUNCHED = "launched"
    STREAMING = "streaming"
    EXITED = "exited"
    FAILED = "failed"  # never spawned


class StreamKind(str, Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass(frozen=True)
class OutputChunk:
    """A chunk of child output, tagged with the stream it came from."""

    stream: StreamKind
    data: bytes

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ExitOutcome:
    """Terminal state of a child. Negative codes mean killed by a signal."""

    returncode: int

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def signal_name(self) -> str | None:
        if self.returncode >= 0:
            return None
        try:
            return signal.Signals(-self.returncode).name
        except ValueError:
            return str(-self.returncode)

    def describe(self) -> str:
        if self.signal_name:
            return f"terminated by signal {self.signal_name}"
        return f"exited with code {self.returncode}"


@dataclass
class ManagedProcess:
    """A booted sub-project, owned by the ProcessOrchestrator."""

    location: ManifestLocation
    name: str = ""
    spec: LaunchSpec | None = None
    state: ProcessState = ProcessState.PENDING
    os_pid: int | None = None
    log_path: Path | None = None
    log_handle: IO[bytes] | None = field(default=None, repr=False)
    exit: ExitOutcome | None = None
    error: str = ""
