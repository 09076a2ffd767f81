from __future__ import annotations

from venvlock.console.commands.command import Command


class ShowDepsCommand(Command):
    name = "show deps"
    description = "Lists the packages installed in the virtualenv."

    def handle(self) -> int:
        self.project.show_deps()

        return 0
