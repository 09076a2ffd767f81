from __future__ import annotations

from typing import TYPE_CHECKING
from typing import ClassVar

from cleo.helpers import argument
from cleo.helpers import option

from venvlock.console.commands.command import Command


if TYPE_CHECKING:
    from cleo.io.inputs.argument import Argument
    from cleo.io.inputs.option import Option


class BumpCommand(Command):
    name = "bump"
    description = "Changes the version of a dependency in the lock file."

    arguments: ClassVar[list[Argument]] = [
        argument("name", "The name of the dependency."),
        argument("version", "The new version, or revision with <c1>--git</>."),
    ]
    options: ClassVar[list[Option]] = [
        option(
            "git",
            None,
            "Replace the revision of a dependency installed from a git repository.",
        ),
    ]

    help = """\
The <info>bump</info> command edits the lock file in place. Run\
 <c1>venvlock install</> afterwards to apply the change.

<info>venvlock bump attrs 23.1.0</info>
<info>venvlock bump --git foo 1f2e3d4</info>
"""

    loggers: ClassVar[list[str]] = ["venvlock.packages.locker"]

    def handle(self) -> int:
        changed = self.project.bump(
            self.argument("name"),
            self.argument("version"),
            use_source_ref=self.option("git"),
        )

        if changed:
            self.line(f"Updated <comment>{self.project.paths.lock}</>")

        return 0
