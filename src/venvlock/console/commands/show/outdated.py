from __future__ import annotations

from venvlock.console.commands.command import Command


class ShowOutdatedCommand(Command):
    name = "show outdated"
    description = "Lists the outdated packages of the virtualenv."

    def handle(self) -> int:
        self.project.show_outdated()

        return 0
