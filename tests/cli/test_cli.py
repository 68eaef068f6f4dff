"""Tests for the booter CLI."""

from __future__ import annotations

import pytest
from rich.console import Console
from typer.testing import CliRunner

from booter.cli import main as cli

runner = CliRunner()


@pytest.fixture
def cli_settings(config, monkeypatch):
    monkeypatch.setattr(cli, "settings", config)
    monkeypatch.setattr(cli, "console", Console(width=400))
    return config


def test_boot_without_argument_exits_1(cli_settings):
    result = runner.invoke(cli._app, ["boot"])

    assert result.exit_code == 1
    assert "Please provide a directory or zip file path" in result.output
    assert not cli_settings.staging_dir.exists()


def test_boot_missing_path_exits_1(cli_settings):
    result = runner.invoke(cli._app, ["boot", "ghost"])

    assert result.exit_code == 1
    assert "Directory or zip file does not exist" in result.output
    assert not cli_settings.log_dir.exists()


def test_boot_runs_and_prints_summary(cli_settings, make_project):
    root = cli_settings.assignments_dir / "student"
    make_project(root / "api", name="api", scripts={"start": "x"}, boot="print('api up')\n")
    make_project(root / "web", name="web", scripts={"start": "x"}, boot="import sys\nsys.exit(7)\n")

    result = runner.invoke(cli._app, ["boot", "student"])

    assert result.exit_code == 0
    assert "api exited successfully" in result.output
    assert "web exited with code 7" in result.output
    assert "Run Summary" in result.output


def test_boot_install_failure_exits_1(cli_settings, make_project):
    root = cli_settings.assignments_dir / "student"
    make_project(root / "api", name="api", scripts={"start": "x"}, boot="print('up')\n")
    (root / "api" / "fail").touch()

    result = runner.invoke(cli._app, ["boot", "student"])

    assert result.exit_code == 1
    assert "Dependency install failed" in result.output


def test_discover_shows_projects(cli_settings, make_project):
    root = cli_settings.assignments_dir / "student"
    make_project(root / "api", name="api", scripts={"start": "x", "dev": "y"})
    make_project(root / "lib", name="lib")

    result = runner.invoke(cli._app, ["discover", "student"])

    assert result.exit_code == 0
    assert "api.log" in result.output
    assert "dev" in result.output
    assert "No start or dev script" in result.output


def test_list_shows_submissions(cli_settings):
    (cli_settings.assignments_dir / "alice").mkdir()
    (cli_settings.assignments_dir / "bob.zip").write_bytes(b"")
    (cli_settings.assignments_dir / "notes.txt").write_text("x")

    result = runner.invoke(cli._app, ["list"])

    assert result.exit_code == 0
    assert "alice" in result.output
    assert "bob.zip" in result.output
    assert "notes.txt" not in result.output


def test_version():
    result = runner.invoke(cli._app, ["version"])

    assert result.exit_code == 0
    assert "booter v" in result.output
