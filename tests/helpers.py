from __future__ import annotations

import os

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from venvlock.console.application import Application
from venvlock.utils.env.runner import CommandRunner
from venvlock.utils.env.runner import ExitStatus


if TYPE_CHECKING:
    from collections.abc import Iterator
    from collections.abc import Mapping
    from collections.abc import Sequence

    from venvlock.project import Project


FREEZE_OUTPUT = """\
attrs==23.1.0
pkg-resources==0.0.0
pluggy==1.3.0
pytest==7.4.3
"""


def make_venv(venv: Path) -> None:
    bin_dir = venv / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    (bin_dir / "python").touch()
    (bin_dir / "pip").touch()


class MockRunner(CommandRunner):
    """
    Records the commands it is asked to run instead of running them.

    `python -m venv <path>` creates a fake virtualenv so that its binaries
    can be resolved.
    """

    def __init__(
        self,
        freeze_output: str = FREEZE_OUTPUT,
        python_info: str = "3.9\nlinux\n",
        exit_codes: dict[str, int] | None = None,
    ) -> None:
        self.executed: list[list[str]] = []
        self.cwds: list[Path | None] = []
        self.environments: list[Mapping[str, str] | None] = []
        self.freeze_output = freeze_output
        self.python_info = python_info
        self.exit_codes = exit_codes or {}

    def run(
        self,
        program: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ExitStatus:
        cmd = self._record(program, args, cwd, env)
        status = self._status(cmd)

        if status.success and list(args[:2]) == ["-m", "venv"]:
            make_venv(Path(args[-1]))

        return status

    def run_capturing_stdout(
        self,
        program: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> tuple[str, ExitStatus]:
        cmd = self._record(program, args, cwd, env)
        status = self._status(cmd)

        output = ""
        if args and args[0] == "-c":
            output = self.python_info
        elif "freeze" in args:
            output = self.freeze_output

        return output, status

    def _record(
        self,
        program: str,
        args: Sequence[str],
        cwd: Path | None,
        env: Mapping[str, str] | None,
    ) -> list[str]:
        cmd = [program, *args]
        self.executed.append(cmd)
        self.cwds.append(cwd)
        self.environments.append(env)

        return cmd

    def _status(self, cmd: list[str]) -> ExitStatus:
        # the program is matched by name: temporary paths contain "pytest"
        line = " ".join([Path(cmd[0]).name, *cmd[1:]])
        for pattern, code in self.exit_codes.items():
            if pattern in line:
                return ExitStatus(code, f"{pattern} failed")

        return ExitStatus(0)


@contextmanager
def switch_working_directory(path: Path) -> Iterator[Path]:
    original_cwd = Path.cwd()
    os.chdir(path)

    try:
        yield path
    finally:
        os.chdir(original_cwd)


class VenvlockTestApplication(Application):
    def __init__(self, project: Project) -> None:
        super().__init__()
        self._project = project
