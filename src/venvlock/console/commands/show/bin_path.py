from __future__ import annotations

from venvlock.console.commands.command import Command


class ShowBinPathCommand(Command):
    name = "show bin-path"
    description = "Shows the path of the binaries directory of the virtualenv."

    def handle(self) -> int:
        self.line(str(self.project.show_bin_path()))

        return 0
