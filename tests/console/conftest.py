from __future__ import annotations

import os

from typing import TYPE_CHECKING

import pytest

from cleo.testers.application_tester import ApplicationTester
from cleo.testers.command_tester import CommandTester

from tests.helpers import VenvlockTestApplication


if TYPE_CHECKING:
    from collections.abc import Callable
    from collections.abc import Iterator

    from venvlock.project import Project


@pytest.fixture(autouse=True)
def terminal_width() -> Iterator[None]:
    environ = dict(os.environ)
    os.environ["COLUMNS"] = "80"

    yield

    os.environ.clear()
    os.environ.update(environ)


@pytest.fixture
def app(project: Project) -> VenvlockTestApplication:
    return VenvlockTestApplication(project)


@pytest.fixture
def app_tester(app: VenvlockTestApplication) -> ApplicationTester:
    return ApplicationTester(app)


@pytest.fixture
def command_tester_factory(
    app: VenvlockTestApplication, project: Project
) -> Callable[[str], CommandTester]:
    def _tester(command: str) -> CommandTester:
        command_obj = app.find(command)
        tester = CommandTester(command_obj)

        # Setting the formatter from the application
        app_io = app.create_io()
        formatter = app_io.output.formatter
        tester.io.output.set_formatter(formatter)
        tester.io.error_output.set_formatter(formatter)

        command_obj.set_project(project)

        return tester

    return _tester
