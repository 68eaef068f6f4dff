"""Shared test fixtures — isolated settings, a recording reporter, project factories.

Child processes are real: the run command is `python boot.py <script>` inside
each project, so no Node toolchain is needed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from booter.config import BooterSettings
from booter.reporter import Reporter

# Writes a marker into the project root, fails when a `fail` marker is present.
INSTALL_SCRIPT = (
    "import pathlib, sys; "
    "pathlib.Path('installed').touch(); "
    "sys.exit(3 if pathlib.Path('fail').exists() else 0)"
)


class RecordingReporter(Reporter):
    """Reporter that keeps (level, message) pairs instead of printing."""

    def __init__(self):
        super().__init__()
        self.lines: list[tuple[str, str]] = []

    def _line(self, level: str, message: str) -> None:
        self.lines.append((level, message))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m in self.lines if level is None or lvl == level]


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def install_command():
    return [sys.executable, "-c", INSTALL_SCRIPT]


@pytest.fixture
def config(tmp_path, install_command):
    assignments = tmp_path / "assignments"
    assignments.mkdir()
    return BooterSettings(
        assignments_dir=assignments,
        logs_dir=tmp_path / "logs",
        install_command=install_command,
        run_command=[sys.executable, "boot.py"],
    )


@pytest.fixture
def make_project():
    """Factory: write a package.json (and optionally boot.py) under ``root``."""

    def _factory(
        root: Path,
        name: str | None = None,
        scripts: dict[str, str] | None = None,
        boot: str | None = None,
    ) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        manifest: dict = {"version": "1.0.0"}
        if name is not None:
            manifest["name"] = name
        if scripts is not None:
            manifest["scripts"] = scripts
        path = root / "package.json"
        path.write_text(json.dumps(manifest))
        if boot is not None:
            (root / "boot.py").write_text(boot)
        return path

    return _factory
