from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any
from typing import ClassVar

from cleo.commands.command import Command as BaseCommand
from cleo.exceptions import CleoValueError


if TYPE_CHECKING:
    from venvlock.console.application import Application
    from venvlock.project import Project


class Command(BaseCommand):
    loggers: ClassVar[list[str]] = []

    _project: Project | None = None

    @property
    def project(self) -> Project:
        if self._project is None:
            return self.get_application().project

        return self._project

    def set_project(self, project: Project) -> None:
        self._project = project

    def get_application(self) -> Application:
        from venvlock.console.application import Application

        application = self.application
        assert isinstance(application, Application)
        return application

    def option(self, name: str, default: Any = None) -> Any:
        try:
            return super().option(name)
        except CleoValueError:
            return default
