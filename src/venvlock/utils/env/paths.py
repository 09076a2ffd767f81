from __future__ import annotations

import dataclasses
import sys

from pathlib import Path
from typing import TYPE_CHECKING

from venvlock.exceptions import NoParentDirectory


if TYPE_CHECKING:
    from venvlock.config.settings import ProjectSettings


DEV_LOCK_FILENAME = "requirements.lock"
PROD_LOCK_FILENAME = "production.lock"
SETUP_DESCRIPTOR_FILENAME = "setup.py"


@dataclasses.dataclass(frozen=True)
class Paths:
    project: Path
    venv: Path
    lock: Path
    setup_descriptor: Path


@dataclasses.dataclass(frozen=True)
class PlatformLayout:
    """
    Where executables live inside a virtualenv.
    """

    bin_dir: str
    suffix: str

    @classmethod
    def current(cls) -> PlatformLayout:
        if sys.platform == "win32":
            return cls("Scripts", ".exe")

        return cls("bin", "")


class PathResolver:
    """
    Computes the locations used by a project.

    Nothing here touches the filesystem: the same inputs always produce the
    same `Paths`.
    """

    def __init__(
        self, project: Path, python_version: str, settings: ProjectSettings
    ) -> None:
        self._project = project
        self._python_version = python_version
        self._settings = settings

    @property
    def env_name(self) -> str:
        return f"{self._settings.mode}-py{self._python_version}"

    def resolve(self) -> Paths:
        venv = self._venv_path()
        if venv.parent == venv:
            raise NoParentDirectory(venv)

        return Paths(
            project=self._project,
            venv=venv,
            lock=self._project / self._lock_filename(),
            setup_descriptor=self._project / SETUP_DESCRIPTOR_FILENAME,
        )

    def _venv_path(self) -> Path:
        if self._settings.venvs_in_project or self._settings.venvs_path is None:
            return self._project / ".venv" / self.env_name

        return self._settings.venvs_path / self.env_name / self._project.name

    def _lock_filename(self) -> str:
        if self._settings.production:
            return PROD_LOCK_FILENAME

        return DEV_LOCK_FILENAME


def resolve_paths(
    project: Path, python_version: str, settings: ProjectSettings
) -> Paths:
    return PathResolver(project, python_version, settings).resolve()
