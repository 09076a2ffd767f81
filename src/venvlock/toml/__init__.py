from __future__ import annotations

from venvlock.toml.exceptions import TOMLError
from venvlock.toml.file import TOMLFile


__all__ = ["TOMLError", "TOMLFile"]
