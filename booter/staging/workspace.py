"""Workspace preparation — empty staging and logs directories for each run."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from booter.exceptions import WorkspaceError

_logger = logging.getLogger(__name__)


def reset_directory(path: Path) -> None:
    """Remove ``path`` if it exists, then recreate it empty."""
    try:
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True)
    except OSError as e:
        raise WorkspaceError(f"Could not reset {path}: {e}") from e
    _logger.debug("Reset %s", path)


def prepare_workspace(staging_dir: Path, logs_dir: Path) -> None:
    for path in (staging_dir, logs_dir):
        reset_directory(path)
