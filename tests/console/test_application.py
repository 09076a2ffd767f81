from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cleo.testers.application_tester import ApplicationTester

from venvlock.console.application import COMMANDS
from venvlock.console.application import Application
from venvlock.console.commands.command import Command
from tests.helpers import switch_working_directory


if TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

    from venvlock.project import Project
    from tests.helpers import MockRunner


@pytest.mark.parametrize("name", COMMANDS)
def test_all_commands_can_be_loaded(name: str) -> None:
    command = Application().find(name)

    assert isinstance(command, Command)
    assert command.name == name


def test_missing_environment_is_rendered(
    app_tester: ApplicationTester, runner: MockRunner
) -> None:
    status = app_tester.execute("show deps")

    assert status == 1
    assert "does not exist" in app_tester.io.fetch_error()
    assert "Traceback" not in app_tester.io.fetch_error()
    assert runner.executed == []


def test_child_exit_code_is_forwarded(
    app_tester: ApplicationTester, runner: MockRunner, venv: Path
) -> None:
    runner.exit_codes["pip list"] = 3

    status = app_tester.execute("show deps")

    assert status == 3
    error = app_tester.io.fetch_error()
    assert "Command python failed with exit code 3." in error
    assert "pip list failed" not in error
    assert "-v" in error


def test_child_errors_are_displayed_when_verbose(
    app_tester: ApplicationTester, runner: MockRunner, venv: Path
) -> None:
    runner.exit_codes["pip list"] = 3

    app_tester.execute("show deps -v")

    assert "pip list failed" in app_tester.io.fetch_error()


def test_run_returns_exit_code_of_program(
    app_tester: ApplicationTester, runner: MockRunner, venv: Path
) -> None:
    (venv / "bin" / "pytest").touch()
    runner.exit_codes["pytest -x"] = 5

    status = app_tester.execute("run pytest -x -v")

    assert status == 5
    assert runner.executed == [[str(venv / "bin" / "pytest"), "-x", "-v"]]


def test_run_keeps_options_passed_before_program(
    app_tester: ApplicationTester, runner: MockRunner, venv: Path
) -> None:
    app_tester.execute("-V run python")

    assert app_tester.io.fetch_output() == app_tester.io.remove_format(
        app_tester.application.long_version + "\n"
    )
    assert runner.executed == []


def test_unknown_command(app_tester: ApplicationTester) -> None:
    assert app_tester.execute("lok") == 1

    error = app_tester.io.fetch_error()
    assert "The requested command lok does not exist." in error
    assert "lock: Locks the project dependencies." in error


def test_unknown_command_in_namespace(app_tester: ApplicationTester) -> None:
    assert app_tester.execute("show dep") == 1

    assert (
        "The requested command does not exist in the show namespace."
        in app_tester.io.fetch_error()
    )


def test_global_options_override_configuration(
    mocker: MockerFixture, project: Project, tmp_path: Path
) -> None:
    create_project = mocker.patch(
        "venvlock.factory.Factory.create_project", return_value=project
    )
    tester = ApplicationTester(Application())

    with switch_working_directory(tmp_path):
        status = tester.execute(
            "show venv-path --production --system-site-packages --python python3.8"
        )

    assert status == 0
    assert tester.io.fetch_output() == f"{project.paths.venv}\n"
    kwargs = create_project.call_args.kwargs
    assert kwargs["cwd"] == tmp_path
    assert kwargs["overrides"] == {
        "production": True,
        "system-site-packages": True,
        "python": "python3.8",
    }


def test_project_option(
    mocker: MockerFixture, project: Project, project_path: Path, tmp_path: Path
) -> None:
    create_project = mocker.patch(
        "venvlock.factory.Factory.create_project", return_value=project
    )
    tester = ApplicationTester(Application())

    with switch_working_directory(tmp_path):
        status = tester.execute(f"-P {project_path.name} show venv-path")

    assert status == 0
    assert create_project.call_args.kwargs["cwd"] == project_path
    assert create_project.call_args.kwargs["overrides"] == {}


def test_project_option_must_be_a_directory(
    mocker: MockerFixture, tmp_path: Path
) -> None:
    create_project = mocker.patch("venvlock.factory.Factory.create_project")
    tester = ApplicationTester(Application())

    status = tester.execute(f"--project {tmp_path / 'missing'} show venv-path")

    assert status == 1
    assert "is not a valid directory" in tester.io.fetch_error()
    create_project.assert_not_called()


def test_option_values_before_command_are_not_taken_as_command(
    mocker: MockerFixture, project: Project, tmp_path: Path
) -> None:
    create_project = mocker.patch(
        "venvlock.factory.Factory.create_project", return_value=project
    )
    tester = ApplicationTester(Application())

    with switch_working_directory(tmp_path):
        status = tester.execute("--python python3 --production show venv-path")

    assert status == 0
    assert tester.io.fetch_output() == f"{project.paths.venv}\n"
    assert create_project.call_args.kwargs["overrides"] == {
        "production": True,
        "python": "python3",
    }


def test_verbosity_survives_option_sorting(
    mocker: MockerFixture, project: Project, project_path: Path, tmp_path: Path
) -> None:
    mocker.patch("venvlock.factory.Factory.create_project", return_value=project)
    tester = ApplicationTester(Application())

    with switch_working_directory(tmp_path):
        status = tester.execute(f"-vvv -P {project_path.name} show venv-path")

    assert status == 0
    assert tester.io.is_debug()
