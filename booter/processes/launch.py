"""Launch resolution — decide which manifest script boots a sub-project."""

from __future__ import annotations

import json

from pydantic import ValidationError

from booter.exceptions import LaunchResolutionError
from booter.types import LaunchSpec, ManifestLocation, PackageManifest

# Checked in order; a later match replaces an earlier one, so "dev" beats "start".
ENTRY_SCRIPTS = ("start", "dev")


def load_manifest(location: ManifestLocation) -> PackageManifest:
    try:
        raw = json.loads(location.path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise LaunchResolutionError(f"Could not read {location}: {e}") from e
    if not isinstance(raw, dict):
        raise LaunchResolutionError(f"Manifest {location} is not a JSON object")
    try:
        return PackageManifest.model_validate(raw)
    except ValidationError as e:
        raise LaunchResolutionError(f"Invalid manifest {location}: {e}") from e


def select_script(manifest: PackageManifest) -> str:
    """Return the boot script name, or "" if the manifest declares none."""
    chosen = ""
    for script in ENTRY_SCRIPTS:
        if manifest.has_script(script):
            chosen = script
    return chosen


def resolve_launch_spec(
    location: ManifestLocation,
    run_command: list[str],
) -> LaunchSpec:
    manifest = load_manifest(location)
    script = select_script(manifest)
    if not script:
        raise LaunchResolutionError(f"No start or dev script found in {location}")

    return LaunchSpec(
        script=script,
        command=[*run_command, script],
        workdir=location.project_root,
        project_name=manifest.name or "",
    )
