"""BootPipeline — the end-to-end run: prepare, materialize, discover, install, boot.

Whole-run-fatal failures surface as BooterError subclasses and stop the
pipeline where they happen. Per-project boot failures are reported by the
orchestrator and never reach this level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from booter.config import BooterSettings
from booter.exceptions import SubmissionError
from booter.processes.discovery import discover_manifests
from booter.processes.installer import DependencyInstaller
from booter.processes.manager import ProcessOrchestrator
from booter.reporter import Reporter
from booter.staging.materialize import is_archive, materialize
from booter.staging.workspace import prepare_workspace
from booter.types import ManagedProcess, ManifestLocation

_logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """What a run found and what became of each booted project."""

    submission: Path
    manifests: list[ManifestLocation] = field(default_factory=list)
    installed: int = 0
    processes: list[ManagedProcess] = field(default_factory=list)


class BootPipeline:
    """Drives one submission from archive/directory to running processes."""

    def __init__(self, config: BooterSettings, reporter: Reporter | None = None) -> None:
        self.config = config
        self.reporter = reporter or Reporter()
        self.orchestrator = ProcessOrchestrator(
            logs_dir=config.log_dir,
            run_command=config.run_command,
            reporter=self.reporter,
        )

    def resolve_submission(self, argument: str | None) -> Path:
        """Validate the CLI argument without touching the filesystem."""
        if not argument:
            raise SubmissionError(
                "Please provide a directory or zip file path to install and boot"
            )

        path = (self.config.assignments_dir / argument).resolve()
        if not path.exists():
            raise SubmissionError("Directory or zip file does not exist")

        staging = self.config.staging_dir
        if path == staging or staging in path.parents or path in staging.parents:
            raise SubmissionError(
                f"Submission {path} overlaps the staging directory {staging}"
            )
        return path

    def stage(self, argument: str | None) -> RunReport:
        """Reset the workspace, materialize the submission and discover manifests."""
        source = self.resolve_submission(argument)
        report = RunReport(submission=source)

        self.reporter.info("Clearing working directory and logs directory")
        prepare_workspace(self.config.staging_dir, self.config.log_dir)
        self.reporter.success("Working directory and logs directory are ready")

        if is_archive(source):
            self.reporter.info("Unzipping the file")
        else:
            self.reporter.info("Copying the directory to the working directory")
        count = materialize(source, self.config.staging_dir)
        self.reporter.success(f"Materialized {count} files")

        self.reporter.pending(f"Finding all {self.config.manifest_name} files")
        report.manifests = discover_manifests(
            self.config.staging_dir,
            manifest_name=self.config.manifest_name,
            excluded_dirs=self.config.excluded_dirs,
        )
        self.reporter.success(
            f"Found {len(report.manifests)} {self.config.manifest_name} files"
        )
        return report

    async def run(self, argument: str | None, install: bool = True) -> RunReport:
        """Full run. Returns after every booted child has exited."""
        report = self.stage(argument)

        if install:
            installer = DependencyInstaller(self.config.install_command, self.reporter)
            report.installed = await installer.install_all(report.manifests)
            self.reporter.success("All dependencies installed")

        self.reporter.pending("Booting each project")
        try:
            report.processes = await self.orchestrator.boot_all(report.manifests)
            await self.orchestrator.wait()
        finally:
            await self.orchestrator.shutdown()

        _logger.info("Run finished for %s", report.submission)
        return report
