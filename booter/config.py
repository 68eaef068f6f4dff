"""Global configuration — loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings


class BooterSettings(BaseSettings):
    assignments_dir: Path = Path("assignments")
    working_dir: Path | None = None  # defaults to <assignments_dir>/working
    logs_dir: Path = Path("logs")
    log_level: str = "WARNING"

    # Sub-project discovery
    manifest_name: str = "package.json"
    excluded_dirs: list[str] = ["node_modules", ".git"]

    # Package manager commands (run_command gets the script name appended)
    install_command: list[str] = ["npx", "--yes", "pnpm", "i", "--prefer-offline"]
    run_command: list[str] = ["npm", "run"]

    model_config = {"env_prefix": "BOOTER_"}

    @model_validator(mode="after")
    def _default_working_dir(self) -> BooterSettings:
        if self.working_dir is None:
            self.working_dir = self.assignments_dir / "working"
        return self

    @property
    def staging_dir(self) -> Path:
        return Path(self.working_dir).resolve()

    @property
    def log_dir(self) -> Path:
        return self.logs_dir.resolve()


settings = BooterSettings()
