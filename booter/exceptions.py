"""Custom exception hierarchy for booter.

Everything except LaunchResolutionError aborts the whole run. A
LaunchResolutionError only takes its own sub-project out of the boot phase.
"""


class BooterError(Exception):
    """Base for all booter errors."""


class SubmissionError(BooterError):
    """The submission argument is missing or does not exist."""


class WorkspaceError(BooterError):
    """The staging or logs directory could not be reset."""


class MaterializationError(BooterError):
    """The submission could not be extracted or copied into the staging area."""


class InstallError(BooterError):
    """A dependency install failed. Remaining installs and the boot phase are skipped."""

    def __init__(self, manifest: str, reason: str) -> None:
        super().__init__(f"Dependency install failed for {manifest}: {reason}")
        self.manifest = manifest
        self.reason = reason


class LaunchResolutionError(BooterError):
    """No bootable script could be resolved for one sub-project."""
