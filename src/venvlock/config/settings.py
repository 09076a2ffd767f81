from __future__ import annotations

import dataclasses
import sys

from pathlib import Path
from typing import TYPE_CHECKING
from typing import Any


if TYPE_CHECKING:
    from collections.abc import Mapping

    from venvlock.config.config import Config


@dataclasses.dataclass(frozen=True)
class ProjectSettings:
    """
    Settings of a single venvlock invocation.

    `production` selects the `prod` extra and the `production.lock` file
    instead of the `dev` extra and `requirements.lock`.
    """

    production: bool = False
    system_site_packages: bool = False
    python: str = sys.executable
    venvs_in_project: bool = True
    venvs_path: Path | None = None

    @property
    def mode(self) -> str:
        return "prod" if self.production else "dev"

    @classmethod
    def from_config(cls, config: Config) -> ProjectSettings:
        return cls(
            production=bool(config.get("production", False)),
            system_site_packages=bool(config.get("system-site-packages", False)),
            python=config.get("python") or sys.executable,
            venvs_in_project=bool(config.get("virtualenvs.in-project", True)),
            venvs_path=config.virtualenvs_path,
        )

    def override(self, overrides: Mapping[str, Any]) -> ProjectSettings:
        """
        Apply settings given on the command line, which take precedence over
        the configuration files and the VENVLOCK_* environment variables.
        """
        return dataclasses.replace(
            self, **{key.replace("-", "_"): value for key, value in overrides.items()}
        )
