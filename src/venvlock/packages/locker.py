from __future__ import annotations

import dataclasses
import logging
import os
import re
import stat
import tempfile

from typing import TYPE_CHECKING

from venvlock.exceptions import MissingLock
from venvlock.packages.dependency import parse_freeze_line


if TYPE_CHECKING:
    from pathlib import Path

    from venvlock.packages.dependency import DependencyRecord


logger = logging.getLogger(__name__)


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)

    return 0o666 & ~umask


_GENERATED_IDENTIFIER = "@" + "generated"
GENERATED_COMMENT = (
    f"This file is automatically {_GENERATED_IDENTIFIER} by venvlock"
    " and should not be changed by hand."
)

_HEADER_RE = re.compile(r"^#\s*(?P<key>[a-z][a-z-]*):\s*(?P<value>.*?)\s*$")
_METADATA_KEYS = {
    "venvlock-version": "tool_version",
    "python-version": "python_version",
    "python-platform": "python_platform",
    "mode": "mode",
}


@dataclasses.dataclass(frozen=True)
class LockMetadata:
    tool_version: str
    python_version: str
    python_platform: str
    mode: str

    def header_lines(self) -> list[str]:
        return [
            f"# {key}: {getattr(self, attribute)}"
            for key, attribute in _METADATA_KEYS.items()
        ]


@dataclasses.dataclass
class LockFile:
    records: list[DependencyRecord] = dataclasses.field(default_factory=list)
    metadata: LockMetadata | None = None

    @property
    def names(self) -> set[str]:
        return {record.name for record in self.records}

    def get(self, name: str) -> DependencyRecord | None:
        for record in self.records:
            if record.name == name:
                return record

        return None


def serialize(records: list[DependencyRecord], metadata: LockMetadata) -> str:
    lines = [f"# {GENERATED_COMMENT}", *metadata.header_lines()]
    lines.extend(record.to_line() for record in records)

    return "\n".join(lines) + "\n"


def deserialize(text: str) -> LockFile:
    records = []
    values: dict[str, str] = {}

    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        if line.startswith("#"):
            match = _HEADER_RE.match(line)
            if match and match.group("key") in _METADATA_KEYS:
                values[_METADATA_KEYS[match.group("key")]] = match.group("value")

            continue

        records.append(parse_freeze_line(line))

    metadata = None
    if len(values) == len(_METADATA_KEYS):
        metadata = LockMetadata(**values)
    elif values:
        logger.debug("Ignoring incomplete lock file header: %s", values)

    return LockFile(records, metadata)


class Locker:
    """
    Reads and writes a lock file.

    Writes always replace the whole file at once.
    """

    def __init__(self, lock: Path) -> None:
        self._lock = lock

    @property
    def lock(self) -> Path:
        return self._lock

    def is_locked(self) -> bool:
        return self._lock.exists()

    def read(self) -> LockFile:
        if not self.is_locked():
            raise MissingLock(self._lock)

        return deserialize(self._lock.read_text(encoding="utf-8"))

    def write(self, lock_file: LockFile) -> None:
        assert lock_file.metadata is not None

        content = serialize(lock_file.records, lock_file.metadata)

        mode = _new_file_mode()
        if self._lock.exists():
            mode = stat.S_IMODE(self._lock.stat().st_mode)
            # keep the line endings of the existing file
            with open(self._lock, encoding="utf-8", newline="") as f:
                line = f.readline()
            if line.endswith("\r\n"):
                content = content.replace("\n", "\r\n")

        fd, tmp_name = tempfile.mkstemp(
            dir=self._lock.parent, prefix=f".{self._lock.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            # mkstemp creates the file readable by its owner only
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self._lock)
        except BaseException:
            os.unlink(tmp_name)
            raise

        logger.debug("Wrote %d dependencies to %s", len(lock_file.records), self._lock)
