"""Tests for the sequential dependency installer."""

from __future__ import annotations

import pytest

from booter.exceptions import InstallError
from booter.processes.installer import DependencyInstaller
from booter.types import ManifestLocation


@pytest.fixture
def installer(install_command, reporter):
    return DependencyInstaller(install_command, reporter)


@pytest.mark.asyncio
async def test_install_runs_in_project_root(tmp_path, make_project, installer, reporter):
    path = make_project(tmp_path / "api", name="api")

    await installer.install(ManifestLocation(path))

    assert (tmp_path / "api" / "installed").exists()
    assert reporter.messages("success") == [f"Dependencies installed for {path}"]


@pytest.mark.asyncio
async def test_install_all_is_sequential_and_stops_on_failure(tmp_path, make_project, installer):
    paths = [make_project(tmp_path / name) for name in ("one", "two", "three")]
    (tmp_path / "two" / "fail").touch()

    with pytest.raises(InstallError) as exc:
        await installer.install_all([ManifestLocation(p) for p in paths])

    assert (tmp_path / "one" / "installed").exists()
    assert (tmp_path / "two" / "installed").exists()
    assert not (tmp_path / "three" / "installed").exists()
    assert exc.value.manifest == str(paths[1])
    assert "exit code 3" in str(exc.value)


@pytest.mark.asyncio
async def test_missing_install_command_is_an_install_error(tmp_path, make_project, reporter):
    path = make_project(tmp_path / "api")
    installer = DependencyInstaller(["definitely-not-a-real-binary-booter"], reporter)

    with pytest.raises(InstallError):
        await installer.install(ManifestLocation(path))


@pytest.mark.asyncio
async def test_install_all_counts_projects(tmp_path, make_project, installer):
    paths = [make_project(tmp_path / name) for name in ("a", "b")]

    count = await installer.install_all([ManifestLocation(p) for p in paths])

    assert count == 2
