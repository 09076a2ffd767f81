from __future__ import annotations

from venvlock.console.commands.command import Command


class ShowVenvPathCommand(Command):
    name = "show venv-path"
    description = "Shows the path of the virtualenv, whether it exists or not."

    def handle(self) -> int:
        self.line(str(self.project.show_venv_path()))

        return 0
