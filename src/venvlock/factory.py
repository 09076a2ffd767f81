from __future__ import annotations

import logging
import os

from pathlib import Path
from typing import TYPE_CHECKING
from typing import Any

from venvlock.config.config import Config
from venvlock.config.settings import ProjectSettings
from venvlock.installation.operations import LockOperations
from venvlock.project import Project
from venvlock.utils.env.env_manager import EnvManager
from venvlock.utils.env.paths import PlatformLayout
from venvlock.utils.env.paths import resolve_paths
from venvlock.utils.env.python_info import InterpreterInfo
from venvlock.utils.env.runner import SubprocessRunner


if TYPE_CHECKING:
    from cleo.io.io import IO

    from venvlock.utils.env.runner import CommandRunner


logger = logging.getLogger(__name__)


class Factory:
    """
    Factory class to create the objects used by venvlock.
    """

    def create_project(
        self,
        cwd: Path | None = None,
        io: IO | None = None,
        runner: CommandRunner | None = None,
        overrides: dict[str, Any] | None = None,
        config: Config | None = None,
    ) -> Project:
        project_path = (cwd or Path.cwd()).resolve()

        if config is None:
            config = Config.create(project_path)

        settings = ProjectSettings.from_config(config)
        if overrides:
            settings = settings.override(overrides)

        if runner is None:
            runner = SubprocessRunner()

        interpreter = InterpreterInfo.query(settings.python, runner)
        logger.debug(
            "Using Python %s (%s) from %s",
            interpreter.version,
            interpreter.platform,
            settings.python,
        )

        paths = resolve_paths(project_path, interpreter.version, settings)
        env_manager = EnvManager(runner, PlatformLayout.current(), io=io)

        return Project(
            paths,
            interpreter,
            settings,
            env_manager,
            LockOperations(env_manager, io=io),
            active_env=os.environ.get("VIRTUAL_ENV"),
            io=io,
        )
