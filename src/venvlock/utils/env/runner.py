from __future__ import annotations

import dataclasses
import logging
import shlex
import subprocess

from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING

from venvlock.utils._compat import decode


if TYPE_CHECKING:
    from collections.abc import Mapping
    from collections.abc import Sequence
    from pathlib import Path


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ExitStatus:
    code: int
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.code == 0


class CommandRunner(ABC):
    """
    The only place where child processes are started.
    """

    @abstractmethod
    def run(
        self,
        program: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ExitStatus:
        """
        Run `program` to completion, streaming its output to the console.
        """

    @abstractmethod
    def run_capturing_stdout(
        self,
        program: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> tuple[str, ExitStatus]:
        """
        Run `program` to completion and return its standard output.
        """


class SubprocessRunner(CommandRunner):
    def run(
        self,
        program: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ExitStatus:
        cmd = [program, *args]
        logger.debug("Running %s", shlex.join(cmd))

        try:
            process = subprocess.Popen(cmd, cwd=cwd, env=env)
        except OSError as e:
            return self._not_started(program, e)

        return ExitStatus(self._exit_code(self._wait(process)))

    def run_capturing_stdout(
        self,
        program: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> tuple[str, ExitStatus]:
        cmd = [program, *args]
        logger.debug("Running %s", shlex.join(cmd))

        try:
            process = subprocess.Popen(
                cmd,
                cwd=cwd,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            return "", self._not_started(program, e)

        try:
            stdout, stderr = process.communicate()
        except KeyboardInterrupt:
            # The child received the interrupt too: report how it ended.
            stdout, stderr = process.communicate()

        return decode(stdout), ExitStatus(
            self._exit_code(process.returncode), decode(stderr)
        )

    @staticmethod
    def _wait(process: subprocess.Popen[bytes]) -> int:
        try:
            return process.wait()
        except KeyboardInterrupt:
            return process.wait()

    @staticmethod
    def _exit_code(returncode: int) -> int:
        # killed by signal N, reported the way shells do
        if returncode < 0:
            return 128 - returncode

        return returncode

    @staticmethod
    def _not_started(program: str, error: OSError) -> ExitStatus:
        logger.debug("Could not start %s: %s", program, error)
        code = 127 if isinstance(error, FileNotFoundError) else 126

        return ExitStatus(code, str(error))
