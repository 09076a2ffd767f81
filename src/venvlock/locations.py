from __future__ import annotations

import os

from pathlib import Path

from platformdirs import user_config_path
from platformdirs import user_data_path


_APP_NAME = "venvlock"

CONFIG_DIR = Path(
    os.getenv("VENVLOCK_CONFIG_DIR")
    or user_config_path(_APP_NAME, appauthor=False, roaming=True)
)


def data_dir() -> Path:
    if venvlock_home := os.getenv("VENVLOCK_HOME"):
        return Path(venvlock_home).expanduser()

    return user_data_path(_APP_NAME, appauthor=False, roaming=True)
