from __future__ import annotations

import argparse
import logging

from contextlib import suppress
from importlib import import_module
from pathlib import Path
from typing import TYPE_CHECKING
from typing import Any
from typing import cast

from cleo._utils import find_similar_names
from cleo.application import Application as BaseApplication
from cleo.events.console_command_event import ConsoleCommandEvent
from cleo.events.console_events import COMMAND
from cleo.events.event_dispatcher import EventDispatcher
from cleo.exceptions import CleoCommandNotFoundError
from cleo.exceptions import CleoError
from cleo.formatters.style import Style
from cleo.io.inputs.argv_input import ArgvInput
from cleo.loaders.factory_command_loader import FactoryCommandLoader

from venvlock.__version__ import __version__
from venvlock.console.commands.command import Command
from venvlock.console.exceptions import ConsoleRuntimeError
from venvlock.exceptions import VenvlockError
from venvlock.utils.helpers import ensure_path


if TYPE_CHECKING:
    from collections.abc import Callable

    from cleo.events.event import Event
    from cleo.io.inputs.definition import Definition
    from cleo.io.inputs.input import Input
    from cleo.io.io import IO
    from cleo.io.outputs.output import Output

    from venvlock.project import Project


def load_command(name: str) -> Callable[[], Command]:
    def _load() -> Command:
        words = name.split(" ")
        module = import_module(
            "venvlock.console.commands."
            + ".".join(word.replace("-", "_") for word in words)
        )
        command_class = getattr(
            module, "".join(c.title().replace("-", "") for c in words) + "Command"
        )
        command: Command = command_class()
        return command

    return _load


COMMANDS = [
    "bump",
    "clean",
    "develop",
    "init",
    "install",
    "lock",
    "run",
    "tidy",
    "upgrade-pip",
    # Show commands
    "show bin-path",
    "show deps",
    "show outdated",
    "show venv-path",
]


class Application(BaseApplication):
    def __init__(self) -> None:
        super().__init__("venvlock", __version__)

        self._project: Project | None = None
        self._io: IO | None = None
        self._working_directory = Path.cwd()
        self._project_directory: Path | None = None
        self._overrides: dict[str, Any] = {}

        dispatcher = EventDispatcher()
        dispatcher.add_listener(COMMAND, self.register_command_loggers)
        dispatcher.add_listener(COMMAND, self.configure_global_options)
        self.set_event_dispatcher(dispatcher)

        command_loader = FactoryCommandLoader(
            {name: load_command(name) for name in COMMANDS}
        )
        self.set_command_loader(command_loader)

    @property
    def _default_definition(self) -> Definition:
        from cleo.io.inputs.option import Option

        definition = super()._default_definition

        definition.add_option(
            Option(
                "--project",
                "-P",
                flag=False,
                description=(
                    "Specify another path as the project root."
                    " Relative paths are resolved from the current working directory."
                ),
            )
        )

        definition.add_option(
            Option(
                "--production",
                flag=True,
                description=(
                    "Use the <c1>prod</> extra and <comment>production.lock</>"
                    " instead of the <c1>dev</> extra and"
                    " <comment>requirements.lock</>."
                ),
            )
        )

        definition.add_option(
            Option(
                "--system-site-packages",
                flag=True,
                description="Give the virtualenv access to the system site-packages.",
            )
        )

        definition.add_option(
            Option(
                "--python",
                flag=False,
                description=(
                    "The Python interpreter used to create the virtualenv"
                    " (defaults to the one running venvlock)."
                ),
            )
        )

        return definition

    @property
    def project_directory(self) -> Path:
        return self._project_directory or self._working_directory

    @property
    def project(self) -> Project:
        from venvlock.factory import Factory

        if self._project is not None:
            return self._project

        self._project = Factory().create_project(
            cwd=self.project_directory,
            io=self._io,
            overrides=self._overrides,
        )

        return self._project

    def create_io(
        self,
        input: Input | None = None,
        output: Output | None = None,
        error_output: Output | None = None,
    ) -> IO:
        io = super().create_io(input, output, error_output)

        # Set our own CLI styles
        formatter = io.output.formatter
        formatter.set_style("c1", Style("cyan"))
        formatter.set_style("c2", Style("default", options=["bold"]))
        formatter.set_style("info", Style("blue"))
        formatter.set_style("comment", Style("green"))
        formatter.set_style("warning", Style("yellow"))
        formatter.set_style("debug", Style("default", options=["dark"]))
        formatter.set_style("success", Style("green"))

        io.output.set_formatter(formatter)
        io.error_output.set_formatter(formatter)

        self._io = io

        return io

    def _run(self, io: IO) -> int:
        exit_code: int = 1

        try:
            exit_code = super()._run(io)
        except VenvlockError as e:
            error = ConsoleRuntimeError.from_error(e)
            io.write_error_line("")
            error.write(io)
            io.write_error_line("")
            exit_code = error.exit_code
        except CleoCommandNotFoundError as e:
            command = self._get_command_name(io)

            if command is not None and command in self.get_namespaces():
                sub_commands = [
                    key for key in self._commands if key.startswith(f"{command} ")
                ]

                io.write_error_line(
                    f"The requested command does not exist in the <c1>{command}</> namespace."
                )
                self._error_write_command_suggestions(
                    io, find_similar_names(command, sub_commands)
                )
                return 1

            if command is not None:
                io.write_error_line(
                    f"The requested command <c1>{command}</> does not exist."
                )
                self._error_write_command_suggestions(
                    io, find_similar_names(command, list(self._commands.keys()))
                )
                return 1

            raise e

        return exit_code

    def _error_write_command_suggestions(
        self, io: IO, suggested_names: list[str]
    ) -> None:
        if suggested_names:
            suggestion_lines = [
                f"<c1>{name.replace(' ', '</> <b>', 1)}</>: {self._commands[name].description}"
                for name in suggested_names
            ]
            suggestions = "\n    ".join(["", *sorted(suggestion_lines)])
            io.write_error_line(
                f"\n<error>Did you mean one of these perhaps?</>{suggestions}"
            )

    def configure_global_options(
        self, event: Event, event_name: str, _: EventDispatcher
    ) -> None:
        """
        Read the global options once the command input is bound: the project
        directory, which must exist, and the settings overriding the
        configuration files.
        """
        assert isinstance(event, ConsoleCommandEvent)
        if not isinstance(event.command, Command):
            return

        input = event.io.input
        self._working_directory = Path.cwd()

        project_directory = input.option("project")
        if project_directory is not None:
            path = Path(project_directory)
            self._project_directory = ensure_path(
                path
                if path.is_absolute()
                else self._working_directory.joinpath(path).resolve(strict=False),
                is_directory=True,
            )

        overrides: dict[str, Any] = {}
        if input.option("production"):
            overrides["production"] = True
        if input.option("system-site-packages"):
            overrides["system-site-packages"] = True
        if input.option("python"):
            overrides["python"] = input.option("python")

        self._overrides = overrides

    def _configure_run_command(self, io: IO) -> None:
        """
        Options after the program name of `venvlock run` belong to the
        program: rewrite `run <program> [args]` as `run -- <program> [args]`.
        """
        with suppress(CleoError):
            io.input.bind(self.definition)

        command_name = io.input.first_argument

        if command_name != "run":
            return

        original_input = cast("ArgvInput", io.input)
        tokens: list[str] = original_input._tokens

        if "--" in tokens:
            return

        command_index = tokens.index(command_name)

        # options given before the program are ours
        subcommand_index = command_index + 1
        while subcommand_index < len(tokens) and tokens[subcommand_index].startswith(
            "-"
        ):
            subcommand_index += 1

        run_input = ArgvInput(
            [
                self._name or "",
                *tokens[:command_index],
                *tokens[command_index + 1 : subcommand_index],
                command_name,
                "--",
                *tokens[subcommand_index:],
            ]
        )
        run_input.set_stream(original_input.stream)

        with suppress(CleoError):
            run_input.bind(self.definition)

        io.set_input(run_input)

    def _sort_global_options(self, io: IO) -> None:
        """
        Move the global options in front of the command name, so that an
        option value such as the one of `-P <dir>` is never mistaken for the
        command.

        Must run after `_configure_run_command`: the options of the program
        given to `run` are behind `--` by then.
        """
        original_input = cast("ArgvInput", io.input)
        tokens: list[str] = original_input._tokens

        parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)

        options = []
        for option in self.definition.options:
            # -v|vv|vvv is left to cleo
            if option.shortcut and "|" in option.shortcut:
                continue

            parser.add_argument(
                f"--{option.name}",
                *([f"-{option.shortcut}"] if option.shortcut else []),
                action="store_true" if option.is_flag() else "store",
            )
            options.append(option)

        args, remaining_args = parser.parse_known_args(tokens)

        tokens = []
        for option in options:
            value = getattr(args, option.name.replace("-", "_"), None)
            if value is None or value is False:
                continue

            tokens.append(f"--{option.name}")
            if option.accepts_value():
                tokens.append(str(value))

        sorted_input = ArgvInput([self._name or "", *tokens, *remaining_args])
        sorted_input.set_stream(original_input.stream)
        # cleo's testers set the interactive flag on the original input
        sorted_input.interactive(io.input.is_interactive())

        with suppress(CleoError):
            sorted_input.bind(self.definition)

        io.set_input(sorted_input)

    def _configure_io(self, io: IO) -> None:
        self._configure_run_command(io)
        self._sort_global_options(io)
        super()._configure_io(io)

    def register_command_loggers(
        self, event: Event, event_name: str, _: EventDispatcher
    ) -> None:
        from venvlock.console.logging.io_formatter import IOFormatter
        from venvlock.console.logging.io_handler import IOHandler

        assert isinstance(event, ConsoleCommandEvent)
        command = event.command
        if not isinstance(command, Command):
            return

        io = event.io

        loggers = [
            "venvlock.config.config",
            "venvlock.factory",
            "venvlock.installation.operations",
        ]

        loggers += command.loggers

        handler = IOHandler(io)
        handler.setFormatter(IOFormatter())

        level = logging.WARNING

        if io.is_debug():
            level = logging.DEBUG
        elif io.is_very_verbose() or io.is_verbose():
            level = logging.INFO

        logging.basicConfig(level=level, handlers=[handler])

        for name in loggers:
            logging.getLogger(name).setLevel(level)


def main() -> int:
    exit_code: int = Application().run()
    return exit_code


if __name__ == "__main__":
    main()
