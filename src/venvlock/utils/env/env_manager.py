from __future__ import annotations

import logging
import os

from typing import TYPE_CHECKING

from cleo.io.null_io import NullIO

from venvlock.exceptions import BinaryNotFound
from venvlock.exceptions import EnvironmentCreationFailed
from venvlock.exceptions import ExternalCommandFailed
from venvlock.exceptions import MissingEnvironment
from venvlock.utils.env.paths import PlatformLayout
from venvlock.utils.helpers import remove_directory


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from cleo.io.io import IO

    from venvlock.config.settings import ProjectSettings
    from venvlock.utils.env.paths import Paths
    from venvlock.utils.env.python_info import InterpreterInfo
    from venvlock.utils.env.runner import CommandRunner
    from venvlock.utils.env.runner import ExitStatus


logger = logging.getLogger(__name__)


class EnvManager:
    """
    Creates, checks and removes the virtualenv of a project, and runs
    programs from inside it.
    """

    def __init__(
        self,
        runner: CommandRunner,
        layout: PlatformLayout | None = None,
        io: IO | None = None,
    ) -> None:
        self._runner = runner
        self._layout = layout or PlatformLayout.current()
        self._io = io or NullIO()

    @property
    def layout(self) -> PlatformLayout:
        return self._layout

    def ensure(
        self,
        paths: Paths,
        interpreter: InterpreterInfo,
        settings: ProjectSettings,
    ) -> None:
        if paths.venv.exists():
            self._io.write_error_line(
                f"Using existing virtualenv: <comment>{paths.venv}</>"
            )
            return

        self.create(paths, interpreter, settings)

    def create(
        self,
        paths: Paths,
        interpreter: InterpreterInfo,
        settings: ProjectSettings,
    ) -> None:
        self._io.write_error_line(
            f"Creating virtualenv for Python <c1>{interpreter.version}</> in"
            f" <comment>{paths.venv}</>"
        )
        paths.venv.parent.mkdir(parents=True, exist_ok=True)

        args = ["-m", "venv"]
        if settings.system_site_packages:
            args.append("--system-site-packages")
        args.append(str(paths.venv))

        status = self._runner.run(settings.python, args)
        if not status.success:
            raise EnvironmentCreationFailed(paths.venv, status.code)

    def expect(self, paths: Paths) -> None:
        if not paths.venv.exists():
            raise MissingEnvironment(paths.venv)

    def clean(self, paths: Paths) -> None:
        self._io.write_error_line(f"Cleaning <comment>{paths.venv}</>")
        if not paths.venv.exists():
            return

        remove_directory(paths.venv, force=True)

    def bin_path(self, paths: Paths) -> Path:
        return paths.venv / self._layout.bin_dir

    def resolve_binary(self, paths: Paths, name: str) -> Path:
        """
        Return the path to the `name` executable of the virtualenv.
        """
        suffix = self._layout.suffix
        if suffix and name.endswith(suffix):
            suffix = ""

        path = self.bin_path(paths) / f"{name}{suffix}"
        if not path.exists():
            raise BinaryNotFound(path)

        return path

    def run(self, paths: Paths, name: str, args: Sequence[str]) -> None:
        status = self._run(paths, name, args)
        if not status.success:
            raise ExternalCommandFailed(name, status.code, status.stderr)

    def run_capturing_stdout(
        self, paths: Paths, name: str, args: Sequence[str]
    ) -> str:
        binary = self.resolve_binary(paths, name)
        self._print_command(binary, args)

        output, status = self._runner.run_capturing_stdout(
            str(binary), args, cwd=paths.project, env=self.environ(paths)
        )
        if not status.success:
            raise ExternalCommandFailed(name, status.code, status.stderr)

        return output

    def execute(self, paths: Paths, name: str, args: Sequence[str]) -> int:
        """
        Run a program from the virtualenv and return its exit code.
        """
        return self._run(paths, name, args).code

    def environ(self, paths: Paths) -> dict[str, str]:
        env = dict(os.environ)
        env["PATH"] = os.pathsep.join([str(self.bin_path(paths)), env.get("PATH", "")])
        env["VIRTUAL_ENV"] = str(paths.venv)
        env.pop("PYTHONHOME", None)
        env.pop("__PYVENV_LAUNCHER__", None)

        return env

    def _run(self, paths: Paths, name: str, args: Sequence[str]) -> ExitStatus:
        binary = self.resolve_binary(paths, name)
        self._print_command(binary, args)

        return self._runner.run(
            str(binary), args, cwd=paths.project, env=self.environ(paths)
        )

    def _print_command(self, binary: Path, args: Sequence[str]) -> None:
        if self._io.is_verbose():
            self._io.write_error_line(f"-> <c2>{binary}</> {' '.join(args)}")
