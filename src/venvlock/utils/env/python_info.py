from __future__ import annotations

import dataclasses

from typing import TYPE_CHECKING

from venvlock.exceptions import ExternalCommandFailed
from venvlock.utils.env.script_strings import GET_PYTHON_INFO_ONELINER


if TYPE_CHECKING:
    from venvlock.utils.env.runner import CommandRunner


@dataclasses.dataclass(frozen=True)
class InterpreterInfo:
    version: str
    platform: str

    @classmethod
    def query(cls, python: str, runner: CommandRunner) -> InterpreterInfo:
        """
        Ask `python` for its major.minor version and its platform.
        """
        output, status = runner.run_capturing_stdout(
            python, ["-c", GET_PYTHON_INFO_ONELINER]
        )
        if not status.success:
            raise ExternalCommandFailed(python, status.code, status.stderr)

        lines = output.strip().splitlines()
        if len(lines) != 2:
            raise ExternalCommandFailed(
                python, status.code, f"Unexpected interpreter output: {output!r}"
            )

        version, platform = (line.strip() for line in lines)

        return cls(version=version, platform=platform)
