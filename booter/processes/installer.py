"""Dependency installation — one blocking install per sub-project, in order.

Installer output is inherited by the console and never written to the
per-project logs; only boot output is kept.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from booter.exceptions import InstallError
from booter.reporter import Reporter
from booter.types import ManifestLocation

_logger = logging.getLogger(__name__)


class DependencyInstaller:
    """Runs the package manager's install command inside each project root."""

    def __init__(self, install_command: list[str], reporter: Reporter) -> None:
        self._command = list(install_command)
        self._reporter = reporter

    async def install(self, location: ManifestLocation) -> None:
        """Install one project's dependencies. Raises InstallError on failure."""
        self._reporter.pending(f"Installing dependencies for {location}")
        _logger.info("Running %s in %s", " ".join(self._command), location.project_root)

        try:
            proc = await asyncio.create_subprocess_exec(
                *self._command,
                cwd=location.project_root,
            )
        except OSError as e:
            raise InstallError(str(location), str(e)) from e

        returncode = await proc.wait()
        if returncode != 0:
            raise InstallError(str(location), f"exit code {returncode}")

        self._reporter.success(f"Dependencies installed for {location}")

    async def install_all(self, locations: Iterable[ManifestLocation]) -> int:
        """Install every project sequentially; the first failure stops the loop."""
        count = 0
        for location in locations:
            await self.install(location)
            count += 1
        return count
