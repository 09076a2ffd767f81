from __future__ import annotations

from typing import TYPE_CHECKING
from typing import ClassVar

from cleo.helpers import option

from venvlock.console.commands.command import Command


if TYPE_CHECKING:
    from cleo.io.inputs.option import Option


class InstallCommand(Command):
    name = "install"
    description = "Installs the locked dependencies and the project itself."

    options: ClassVar[list[Option]] = [
        option(
            "no-develop",
            None,
            "Do not install the project itself in develop mode.",
        ),
    ]

    help = """\
The <info>install</info> command creates the virtualenv if needed, installs the\
 dependencies pinned in the lock file, then installs the project in develop mode.

<info>venvlock install</info>
"""

    loggers: ClassVar[list[str]] = ["venvlock.utils.env.runner"]

    def handle(self) -> int:
        self.project.install(develop=not self.option("no-develop"))

        return 0
