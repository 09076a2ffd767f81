from __future__ import annotations

from venvlock.console.commands.command import Command


class DevelopCommand(Command):
    name = "develop"
    description = "Installs the project in develop mode, without its dependencies."

    def handle(self) -> int:
        self.project.develop()

        return 0
