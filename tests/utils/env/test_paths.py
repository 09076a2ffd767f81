from __future__ import annotations

from pathlib import Path

import pytest

from venvlock.config.settings import ProjectSettings
from venvlock.exceptions import NoParentDirectory
from venvlock.utils.env.paths import PathResolver
from venvlock.utils.env.paths import PlatformLayout
from venvlock.utils.env.paths import resolve_paths


def test_resolve_paths_in_project() -> None:
    project = Path("/work/foo")
    paths = resolve_paths(project, "3.9", ProjectSettings())

    assert paths.project == project
    assert paths.venv == project / ".venv" / "dev-py3.9"
    assert paths.lock == project / "requirements.lock"
    assert paths.setup_descriptor == project / "setup.py"


def test_resolve_paths_in_production() -> None:
    project = Path("/work/foo")
    paths = resolve_paths(project, "3.10", ProjectSettings(production=True))

    assert paths.venv == project / ".venv" / "prod-py3.10"
    assert paths.lock == project / "production.lock"


def test_resolve_paths_out_of_project() -> None:
    project = Path("/work/foo")
    settings = ProjectSettings(venvs_in_project=False, venvs_path=Path("/data/envs"))

    paths = resolve_paths(project, "3.9", settings)

    assert paths.venv == Path("/data/envs/dev-py3.9/foo")
    # the lock file always lives in the project
    assert paths.lock == project / "requirements.lock"


def test_resolve_paths_is_pure(tmp_path: Path) -> None:
    project = tmp_path / "does-not-exist"
    settings = ProjectSettings()

    assert resolve_paths(project, "3.9", settings) == resolve_paths(
        project, "3.9", settings
    )
    assert not project.exists()


def test_env_name_depends_on_mode_and_version() -> None:
    project = Path("/work/foo")

    assert PathResolver(project, "3.8", ProjectSettings()).env_name == "dev-py3.8"
    assert (
        PathResolver(project, "3.11", ProjectSettings(production=True)).env_name
        == "prod-py3.11"
    )


def test_resolve_raises_when_venv_has_no_parent(mocker) -> None:
    resolver = PathResolver(Path("/work/foo"), "3.9", ProjectSettings())
    mocker.patch.object(resolver, "_venv_path", return_value=Path("/"))

    with pytest.raises(NoParentDirectory):
        resolver.resolve()


@pytest.mark.parametrize(
    ("platform", "expected"),
    [
        ("linux", PlatformLayout("bin", "")),
        ("darwin", PlatformLayout("bin", "")),
        ("win32", PlatformLayout("Scripts", ".exe")),
    ],
)
def test_platform_layout_current(
    mocker, platform: str, expected: PlatformLayout
) -> None:
    mocker.patch("sys.platform", platform)

    assert PlatformLayout.current() == expected
