from __future__ import annotations

import logging
import os
import re

from copy import deepcopy
from pathlib import Path
from typing import TYPE_CHECKING
from typing import Any
from typing import ClassVar

from venvlock.locations import CONFIG_DIR
from venvlock.locations import data_dir
from venvlock.toml import TOMLFile
from venvlock.utils.helpers import merge_dicts


if TYPE_CHECKING:
    from collections.abc import Callable
    from collections.abc import Mapping


PROJECT_CONFIG_FILENAME = "venvlock.toml"


def boolean_normalizer(val: str) -> bool:
    return val.lower() in ["true", "1"]


logger = logging.getLogger(__name__)


class Config:
    default_config: ClassVar[dict[str, Any]] = {
        "data-dir": str(data_dir()),
        "python": "",
        "production": False,
        "system-site-packages": False,
        "virtualenvs": {
            "in-project": True,
            "path": os.path.join("{data-dir}", "virtualenvs"),
        },
    }

    def __init__(self, use_environment: bool = True) -> None:
        self._config = deepcopy(self.default_config)
        self._use_environment = use_environment

    def merge(self, config: Mapping[str, Any]) -> None:
        merge_dicts(self._config, config)

    @property
    def virtualenvs_path(self) -> Path:
        path = self.get("virtualenvs.path")
        if not path:
            path = Path(self.get("data-dir")) / "virtualenvs"
        return Path(path).expanduser()

    def get(self, setting_name: str, default: Any = None) -> Any:
        """
        Retrieve a setting value.
        """
        keys = setting_name.split(".")

        # Looking in the environment if the setting
        # is set via a VENVLOCK_* environment variable
        if self._use_environment:
            env = "VENVLOCK_" + "_".join(k.upper().replace("-", "_") for k in keys)
            env_value = os.getenv(env)
            if env_value is not None:
                return self.process(self._get_normalizer(setting_name)(env_value))

        value = self._config
        for key in keys:
            if key not in value:
                return self.process(default)

            value = value[key]

        if self._use_environment and isinstance(value, dict):
            return {k: self.get(f"{setting_name}.{k}") for k in value}

        return self.process(value)

    def process(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value

        def resolve_from_config(match: re.Match[str]) -> Any:
            key = match.group(1)
            config_value = self.get(key)
            if config_value:
                return config_value

            return f"{{{key}}}"

        return re.sub(r"{(.+?)}", resolve_from_config, value)

    @staticmethod
    def _get_normalizer(name: str) -> Callable[[str], Any]:
        if name in {
            "production",
            "system-site-packages",
            "virtualenvs.in-project",
        }:
            return boolean_normalizer

        if name == "virtualenvs.path":
            return lambda val: str(Path(val))

        return lambda val: val

    def load_file(self, config_file: TOMLFile) -> None:
        if config_file.exists():
            logger.debug("Loading configuration file %s", config_file.path)
            self.merge(config_file.read().unwrap())

    def load_project(self, project: Path) -> None:
        self.load_file(TOMLFile(project / PROJECT_CONFIG_FILENAME))

    @classmethod
    def create(cls, project: Path | None = None) -> Config:
        """
        Load the user configuration file, then the one of `project`.
        """
        config = cls()
        config.load_file(TOMLFile(CONFIG_DIR / "config.toml"))
        if project is not None:
            config.load_project(project)

        return config
