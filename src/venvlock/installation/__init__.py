from __future__ import annotations

from venvlock.installation.operations import LockOperations
from venvlock.installation.operations import LockOptions


__all__ = ["LockOperations", "LockOptions"]
