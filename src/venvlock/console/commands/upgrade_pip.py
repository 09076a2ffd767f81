from __future__ import annotations

from venvlock.console.commands.command import Command


class UpgradePipCommand(Command):
    name = "upgrade-pip"
    description = "Upgrades pip inside the virtualenv."

    def handle(self) -> int:
        self.project.upgrade_pip()

        return 0
