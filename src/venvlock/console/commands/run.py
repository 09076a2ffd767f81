from __future__ import annotations

from typing import TYPE_CHECKING
from typing import ClassVar

from cleo.helpers import argument

from venvlock.console.commands.command import Command


if TYPE_CHECKING:
    from cleo.io.inputs.argument import Argument


class RunCommand(Command):
    name = "run"
    description = "Runs a program from the virtualenv."

    arguments: ClassVar[list[Argument]] = [
        argument("args", "The program and arguments/options to run.", multiple=True)
    ]

    loggers: ClassVar[list[str]] = ["venvlock.utils.env.runner"]

    def handle(self) -> int:
        return self.project.run(self.argument("args"))
