from __future__ import annotations

import logging

from typing import TYPE_CHECKING

from cleo.io.null_io import NullIO

from venvlock.exceptions import MissingLock
from venvlock.layouts import Layout


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from cleo.io.io import IO

    from venvlock.config.settings import ProjectSettings
    from venvlock.installation.operations import LockOperations
    from venvlock.installation.operations import LockOptions
    from venvlock.packages.locker import LockFile
    from venvlock.utils.env.env_manager import EnvManager
    from venvlock.utils.env.paths import Paths
    from venvlock.utils.env.python_info import InterpreterInfo


logger = logging.getLogger(__name__)


class Project:
    """
    The operations venvlock offers on a project directory.

    The state of a project only lives on disk: whether `setup.py`, the
    virtualenv and the lock file exist.
    """

    def __init__(
        self,
        paths: Paths,
        interpreter: InterpreterInfo,
        settings: ProjectSettings,
        env_manager: EnvManager,
        operations: LockOperations,
        active_env: str | None = None,
        io: IO | None = None,
    ) -> None:
        self._paths = paths
        self._interpreter = interpreter
        self._settings = settings
        self._env_manager = env_manager
        self._operations = operations
        self._active_env = active_env
        self._io = io or NullIO()

    @property
    def paths(self) -> Paths:
        return self._paths

    @property
    def interpreter(self) -> InterpreterInfo:
        return self._interpreter

    @property
    def settings(self) -> ProjectSettings:
        return self._settings

    @property
    def env_manager(self) -> EnvManager:
        return self._env_manager

    @property
    def operations(self) -> LockOperations:
        return self._operations

    def init(self, name: str, version: str = "0.1.0", author: str | None = None) -> None:
        """
        Create `setup.py` if it does not exist.
        """
        Layout(name, version=version, author=author).create(
            self._paths.setup_descriptor
        )
        self._io.write_line(
            f"Generated a new <comment>{self._paths.setup_descriptor.name}</>"
        )

    def install(self, develop: bool = True) -> None:
        """
        Install the dependencies of the lock file, then the project itself.
        """
        self._io.write_line("<info>Preparing project for development</>")
        if not self._paths.lock.exists():
            raise MissingLock(self._paths.lock)

        self._env_manager.ensure(self._paths, self._interpreter, self._settings)
        self._operations.install_from_lock(self._paths)

        if develop:
            self._operations.develop(self._paths)

    def develop(self) -> None:
        self._env_manager.expect(self._paths)
        self._operations.develop(self._paths)

    def lock(self, options: LockOptions | None = None) -> LockFile:
        return self._operations.generate(
            self._paths, self._interpreter, self._settings, options
        )

    def bump(self, name: str, version: str, use_source_ref: bool = False) -> bool:
        metadata = self._operations.metadata(self._interpreter, self._settings)

        return self._operations.bump(
            self._paths.lock, name, version, use_source_ref, metadata
        )

    def tidy(self) -> LockFile:
        return self._operations.tidy(
            self._paths, self._interpreter, self._settings, self._active_env
        )

    def clean(self) -> None:
        """
        Remove the virtualenv. The lock file and setup.py are left untouched.
        """
        self._env_manager.clean(self._paths)

    def run(self, args: Sequence[str]) -> int:
        """
        Run a program from the virtualenv and return its exit code.
        """
        self._env_manager.expect(self._paths)
        name, *rest = args

        return self._env_manager.execute(self._paths, name, rest)

    def upgrade_pip(self) -> None:
        self._env_manager.expect(self._paths)
        self._operations.upgrade_pip(self._paths)

    def show_deps(self) -> None:
        # What is actually installed, not what the lock file says.
        self._env_manager.expect(self._paths)
        self._env_manager.run(self._paths, "python", ["-m", "pip", "list"])

    def show_outdated(self) -> None:
        self._env_manager.expect(self._paths)
        self._env_manager.run(
            self._paths,
            "python",
            ["-m", "pip", "list", "--outdated", "--format", "columns"],
        )

    def show_venv_path(self) -> Path:
        return self._paths.venv

    def show_bin_path(self) -> Path:
        self._env_manager.expect(self._paths)

        return self._env_manager.bin_path(self._paths)
