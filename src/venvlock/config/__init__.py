from __future__ import annotations

from venvlock.config.config import Config
from venvlock.config.settings import ProjectSettings


__all__ = ["Config", "ProjectSettings"]
