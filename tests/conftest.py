from __future__ import annotations

import os

from typing import TYPE_CHECKING

import pytest

from venvlock.config.settings import ProjectSettings
from venvlock.installation.operations import LockOperations
from venvlock.project import Project
from venvlock.utils.env.env_manager import EnvManager
from venvlock.utils.env.paths import PlatformLayout
from venvlock.utils.env.paths import resolve_paths
from venvlock.utils.env.python_info import InterpreterInfo
from tests.helpers import MockRunner
from tests.helpers import make_venv


if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from pytest_mock import MockerFixture

    from venvlock.utils.env.paths import Paths


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, mocker: MockerFixture) -> Iterator[None]:
    environ = dict(os.environ)

    for key in list(os.environ):
        if key.startswith("VENVLOCK_") or key == "VIRTUAL_ENV":
            del os.environ[key]

    # never read the configuration file of the user running the tests
    mocker.patch("venvlock.config.config.CONFIG_DIR", tmp_path / "config")

    yield

    os.environ.clear()
    os.environ.update(environ)


@pytest.fixture
def runner() -> MockRunner:
    return MockRunner()


@pytest.fixture
def layout() -> PlatformLayout:
    return PlatformLayout("bin", "")


@pytest.fixture
def settings() -> ProjectSettings:
    return ProjectSettings(python="python3")


@pytest.fixture
def interpreter() -> InterpreterInfo:
    return InterpreterInfo(version="3.9", platform="linux")


@pytest.fixture
def project_path(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()

    return path.resolve()


@pytest.fixture
def paths(
    project_path: Path, interpreter: InterpreterInfo, settings: ProjectSettings
) -> Paths:
    return resolve_paths(project_path, interpreter.version, settings)


@pytest.fixture
def setup_py(paths: Paths) -> Path:
    paths.setup_descriptor.write_text(
        "from setuptools import setup\n\nsetup(name='foo')\n", encoding="utf-8"
    )

    return paths.setup_descriptor


@pytest.fixture
def venv(paths: Paths) -> Path:
    make_venv(paths.venv)

    return paths.venv


@pytest.fixture
def env_manager(runner: MockRunner, layout: PlatformLayout) -> EnvManager:
    return EnvManager(runner, layout)


@pytest.fixture
def operations(env_manager: EnvManager) -> LockOperations:
    return LockOperations(env_manager, tool_version="0.1.0")


@pytest.fixture
def project(
    paths: Paths,
    interpreter: InterpreterInfo,
    settings: ProjectSettings,
    env_manager: EnvManager,
    operations: LockOperations,
) -> Project:
    return Project(paths, interpreter, settings, env_manager, operations)
