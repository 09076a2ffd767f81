from __future__ import annotations

from venvlock.console.commands.command import Command


class CleanCommand(Command):
    name = "clean"
    description = "Removes the virtualenv of the project."

    def handle(self) -> int:
        self.project.clean()

        return 0
