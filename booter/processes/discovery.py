"""Manifest discovery — find the sub-projects inside the staging area."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from booter.types import ManifestLocation

_logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED = ("node_modules", ".git")


def discover_manifests(
    root: Path,
    manifest_name: str = "package.json",
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED,
) -> list[ManifestLocation]:
    """Walk ``root`` and return every manifest, in deterministic walk order.

    Excluded directories are pruned before descent, so nothing beneath them
    is ever visited.
    """
    excluded = set(excluded_dirs)
    found: list[ManifestLocation] = []

    for dirpath, dirnames, filenames in os.walk(root.resolve()):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)
        if manifest_name in filenames:
            found.append(ManifestLocation(Path(dirpath) / manifest_name))

    _logger.debug("Found %d manifests under %s", len(found), root)
    return found
