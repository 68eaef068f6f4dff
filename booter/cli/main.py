"""booter CLI — boot every sub-project in a submission.

`booter boot <path>` is the main flow; <path> is relative to the
assignments directory and names either a directory or a .zip file.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from booter.config import settings
from booter.exceptions import BooterError, LaunchResolutionError
from booter.reporter import Reporter

console = Console()

_app = typer.Typer(
    name="booter",
    help="booter -- unpack a submission, install every sub-project, boot them all.",
    no_args_is_help=True,
)


def _fail(reporter: Reporter, error: BooterError) -> None:
    reporter.error(str(error))
    raise typer.Exit(code=1)


@_app.command("boot")
def boot(
    submission: Optional[str] = typer.Argument(
        None, help="Directory or zip file inside the assignments directory",
    ),
    skip_install: bool = typer.Option(
        False, "--skip-install", help="Boot without installing dependencies first",
    ),
):
    """Install and boot every project found in the submission."""
    from booter.cli.context import configure_logging, run_async
    from booter.pipeline import BootPipeline

    configure_logging(settings.log_level, console)
    reporter = Reporter(console)
    pipeline = BootPipeline(settings, reporter)

    try:
        report = run_async(pipeline.run(submission, install=not skip_install))
    except BooterError as e:
        _fail(reporter, e)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped watching. Child processes were not signalled.[/dim]")
        return

    if report.processes:
        _print_summary(pipeline.orchestrator.list_processes())


@_app.command("discover")
def discover(
    submission: Optional[str] = typer.Argument(
        None, help="Directory or zip file inside the assignments directory",
    ),
):
    """Stage the submission and show which projects would boot, and how."""
    from booter.cli.context import configure_logging
    from booter.pipeline import BootPipeline
    from booter.processes.launch import resolve_launch_spec

    configure_logging(settings.log_level, console)
    reporter = Reporter(console)
    pipeline = BootPipeline(settings, reporter)

    try:
        report = pipeline.stage(submission)
    except BooterError as e:
        _fail(reporter, e)

    if not report.manifests:
        console.print("[dim]No projects found.[/dim]")
        return

    table = Table(title=f"Projects in {report.submission.name}")
    table.add_column("Project", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Script", style="green")
    table.add_column("Log", style="dim")

    for location in report.manifests:
        try:
            spec = resolve_launch_spec(location, settings.run_command)
            name, script = spec.project_name, " ".join(spec.command)
        except LaunchResolutionError as e:
            name, script = "", f"[red]{escape(str(e))}[/red]"
        table.add_row(
            str(location.project_root.relative_to(settings.staging_dir)),
            name,
            script,
            location.log_name,
        )

    console.print(table)


@_app.command("list")
def list_submissions():
    """List directories and zip files in the assignments directory."""
    root = settings.assignments_dir
    if not root.is_dir():
        console.print(f"[red]Assignments directory {root} does not exist[/red]")
        raise typer.Exit(code=1)

    staging = settings.staging_dir
    entries = [
        p for p in sorted(root.iterdir())
        if p.resolve() != staging and (p.is_dir() or ".zip" in p.name)
    ]
    if not entries:
        console.print("[dim]No submissions found.[/dim]")
        return

    for entry in entries:
        kind = "zip" if ".zip" in entry.name else "dir"
        console.print(f"[cyan]{kind}[/cyan]  {entry.name}")


@_app.command("version")
def version():
    """Show the installed booter version."""
    from booter import __version__
    console.print(f"booter v{__version__}")


def _print_summary(rows: list[dict]) -> None:
    table = Table(title="Run Summary")
    table.add_column("Name", style="cyan")
    table.add_column("Script", style="white")
    table.add_column("State", style="green")
    table.add_column("PID", justify="right", style="dim")
    table.add_column("Outcome", style="white")
    table.add_column("Log", style="dim")

    for row in rows:
        state_style = {
            "exited": "dim",
            "failed": "bold red",
        }.get(row["state"], "white")
        table.add_row(
            row["name"] or row["project"],
            row["script"],
            f"[{state_style}]{row['state']}[/{state_style}]",
            str(row["os_pid"] or "-"),
            escape(row["exit"]),
            row["log"],
        )

    console.print(table)


def app(args: list[str] | None = None) -> None:
    """Console-script entry point."""
    _app(args=args, prog_name="booter")


if __name__ == "__main__":
    app()
