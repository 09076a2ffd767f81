from __future__ import annotations

from typing import ClassVar

from venvlock.console.commands.command import Command


class TidyCommand(Command):
    name = "tidy"
    description = "Removes the dependencies the project no longer needs from the lock file."

    help = """\
The <info>tidy</info> command recreates the virtualenv from scratch, installs the\
 project using the current lock file as constraints, and only keeps the dependencies
that are still installed.

It cannot be run from inside an activated virtualenv.
"""

    loggers: ClassVar[list[str]] = [
        "venvlock.packages.locker",
        "venvlock.utils.env.runner",
    ]

    def handle(self) -> int:
        self.project.tidy()

        return 0
