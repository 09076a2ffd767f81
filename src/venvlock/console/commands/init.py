from __future__ import annotations

from typing import TYPE_CHECKING
from typing import ClassVar

from cleo.helpers import option

from venvlock.console.commands.command import Command


if TYPE_CHECKING:
    from cleo.io.inputs.option import Option


class InitCommand(Command):
    name = "init"
    description = "Creates a basic <comment>setup.py</> file in the project directory."

    options: ClassVar[list[Option]] = [
        option(
            "name",
            None,
            "Name of the package. Defaults to the name of the project directory.",
            flag=False,
        ),
        option(
            "initial-version",
            None,
            "Version of the package.",
            flag=False,
            default="0.1.0",
        ),
        option("author", None, "Author name of the package.", flag=False),
    ]

    help = """\
The <c1>init</c1> command creates a <comment>setup.py</> file declaring the\
 <c1>dev</> and <c1>prod</> extras used by <c1>venvlock lock</>.
"""

    def handle(self) -> int:
        project = self.project
        name = self.option("name") or project.paths.project.name

        project.init(
            name,
            version=self.option("initial-version"),
            author=self.option("author"),
        )

        return 0
