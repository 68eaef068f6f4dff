"""CLI runtime helpers — logging setup and the sync-to-async bridge."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str, console: Console | None = None) -> None:
    """Route stdlib logging through rich at the configured level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def run_async(coro: Coroutine) -> Any:
    """Run an async coroutine from sync CLI code."""
    return asyncio.run(coro)
