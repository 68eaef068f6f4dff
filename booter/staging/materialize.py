"""Source materialization — mirror a submission into the staging area.

A submission is either a zip archive (any path whose name contains ".zip")
or a plain directory. Archives are extracted one entry at a time, streaming
each member to disk, so large submissions never sit in memory whole.
"""

from __future__ import annotations

import logging
import shutil
import stat
import zipfile
from pathlib import Path

from booter.exceptions import MaterializationError

_logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def is_archive(source: Path) -> bool:
    return ".zip" in source.name


def materialize(source: Path, staging_dir: Path) -> int:
    """Copy or extract ``source`` into ``staging_dir``. Returns the file count."""
    if is_archive(source):
        return extract_archive(source, staging_dir)
    return copy_directory(source, staging_dir)


def extract_archive(archive: Path, staging_dir: Path) -> int:
    root = staging_dir.resolve()
    count = 0
    try:
        with zipfile.ZipFile(archive) as zf:
            for member in zf.infolist():
                target = _safe_target(root, member.filename)
                if member.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                # Drain every member fully, even ones nobody will read.
                with zf.open(member) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst, _CHUNK_SIZE)

                mode = (member.external_attr >> 16) & 0o777
                if mode and stat.S_ISREG(member.external_attr >> 16):
                    target.chmod(mode)
                count += 1
                _logger.debug("Extracted %s", member.filename)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError) as e:
        raise MaterializationError(f"Corrupt archive {archive}: {e}") from e
    except OSError as e:
        raise MaterializationError(f"Could not extract {archive}: {e}") from e

    return count


def _safe_target(root: Path, name: str) -> Path:
    target = (root / name).resolve()
    if target != root and root not in target.parents:
        raise MaterializationError(f"Archive entry escapes the staging area: {name}")
    return target


def copy_directory(source: Path, staging_dir: Path) -> int:
    if not source.is_dir():
        raise MaterializationError(f"Not a directory or zip archive: {source}")
    try:
        shutil.copytree(source, staging_dir, symlinks=True, dirs_exist_ok=True)
    except (shutil.Error, OSError) as e:
        raise MaterializationError(f"Could not copy {source}: {e}") from e

    return sum(1 for p in staging_dir.rglob("*") if not p.is_dir())
