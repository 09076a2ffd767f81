from __future__ import annotations

from venvlock.packages.dependency import DependencyRecord
from venvlock.packages.dependency import parse_freeze_line
from venvlock.packages.dependency import parse_freeze_output
from venvlock.packages.locker import LockFile
from venvlock.packages.locker import Locker
from venvlock.packages.locker import LockMetadata


__all__ = [
    "DependencyRecord",
    "LockFile",
    "LockMetadata",
    "Locker",
    "parse_freeze_line",
    "parse_freeze_output",
]
