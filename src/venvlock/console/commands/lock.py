from __future__ import annotations

from typing import TYPE_CHECKING
from typing import ClassVar

from cleo.helpers import option

from venvlock.console.commands.command import Command


if TYPE_CHECKING:
    from cleo.io.inputs.option import Option


class LockCommand(Command):
    name = "lock"
    description = "Locks the project dependencies."

    options: ClassVar[list[Option]] = [
        option(
            "python-version",
            None,
            "Restrict the new dependencies to a Python version,"
            ' e.g. "3.8" or "<3.8".',
            flag=False,
        ),
        option(
            "platform",
            None,
            'Restrict the new dependencies to a platform, e.g. "win32".',
            flag=False,
        ),
    ]

    help = """
The <info>lock</info> command installs the dependencies declared in\
 <comment>setup.py</> in the virtualenv, and pins the installed versions in the
lock file.
Dependencies that were restricted to another platform in the previous lock file
are kept.

<info>venvlock lock</info>
"""

    loggers: ClassVar[list[str]] = [
        "venvlock.packages.locker",
        "venvlock.utils.env.runner",
    ]

    def handle(self) -> int:
        from venvlock.installation.operations import LockOptions

        try:
            options = LockOptions(
                python_version=self.option("python-version"),
                sys_platform=self.option("platform"),
            )
            # validate before touching the virtualenv
            _ = options.marker
        except ValueError as e:
            self.line_error(f"<error>{e}</error>")
            return 1

        self.project.lock(options)

        return 0
