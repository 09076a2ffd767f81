from __future__ import annotations

from venvlock.utils.env.env_manager import EnvManager
from venvlock.utils.env.paths import Paths
from venvlock.utils.env.paths import PathResolver
from venvlock.utils.env.paths import PlatformLayout
from venvlock.utils.env.paths import resolve_paths
from venvlock.utils.env.python_info import InterpreterInfo
from venvlock.utils.env.runner import CommandRunner
from venvlock.utils.env.runner import ExitStatus
from venvlock.utils.env.runner import SubprocessRunner


__all__ = [
    "CommandRunner",
    "EnvManager",
    "ExitStatus",
    "InterpreterInfo",
    "PathResolver",
    "Paths",
    "PlatformLayout",
    "SubprocessRunner",
    "resolve_paths",
]
