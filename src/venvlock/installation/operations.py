from __future__ import annotations

import dataclasses
import logging

from typing import TYPE_CHECKING

from cleo.io.null_io import NullIO
from packaging.markers import InvalidMarker
from packaging.markers import Marker
from packaging.specifiers import InvalidSpecifier
from packaging.specifiers import Specifier

from venvlock.__version__ import __version__
from venvlock.exceptions import ActiveEnvironmentConflict
from venvlock.exceptions import BinaryNotFound
from venvlock.exceptions import DependencyNotFound
from venvlock.exceptions import ExternalCommandFailed
from venvlock.exceptions import MissingLock
from venvlock.exceptions import MissingSetupDescriptor
from venvlock.exceptions import PipUpgradeFailed
from venvlock.packages.dependency import parse_freeze_output
from venvlock.packages.locker import LockFile
from venvlock.packages.locker import Locker
from venvlock.packages.locker import LockMetadata


if TYPE_CHECKING:
    from pathlib import Path

    from cleo.io.io import IO

    from venvlock.config.settings import ProjectSettings
    from venvlock.packages.dependency import DependencyRecord
    from venvlock.utils.env.env_manager import EnvManager
    from venvlock.utils.env.paths import Paths
    from venvlock.utils.env.python_info import InterpreterInfo


logger = logging.getLogger(__name__)

FREEZE_ARGS = ["-m", "pip", "freeze", "--exclude-editable", "--all", "--local"]


@dataclasses.dataclass(frozen=True)
class LockOptions:
    """
    Environment markers to attach to dependencies that appear in the lock
    file for the first time.

    `python_version` is a comma-separated list of version specifiers; a bare
    version means `==`.
    """

    python_version: str | None = None
    sys_platform: str | None = None

    def _python_version_markers(self) -> list[str]:
        assert self.python_version is not None

        markers = []
        for constraint in self.python_version.split(","):
            constraint = constraint.strip()
            if constraint[:1].isdigit():
                constraint = f"=={constraint}"

            try:
                specifier = Specifier(constraint)
            except InvalidSpecifier as e:
                raise ValueError(
                    f"Invalid python version: {self.python_version}"
                ) from e

            markers.append(
                f'python_version {specifier.operator} "{specifier.version}"'
            )

        return markers

    @property
    def marker(self) -> str | None:
        parts = []

        if self.python_version:
            parts.extend(self._python_version_markers())

        if self.sys_platform:
            parts.append(f'sys_platform == "{self.sys_platform}"')

        if not parts:
            return None

        try:
            return str(Marker(" and ".join(parts)))
        except InvalidMarker as e:
            raise ValueError(f"Invalid marker: {e}") from e


def merge_records(
    previous: LockFile | None,
    fresh: list[DependencyRecord],
    options: LockOptions | None = None,
) -> list[DependencyRecord]:
    """
    Combine freshly frozen dependencies with the content of the previous
    lock file.

    Known dependencies keep their environment marker, new ones get the
    marker of `options`. Previous dependencies restricted by a marker that
    the freeze did not report are kept: they belong to another platform.
    """
    if previous is None:
        previous = LockFile()

    new_marker = options.marker if options is not None else None
    fresh_names = {record.name for record in fresh}

    merged = []
    for record in fresh:
        known = previous.get(record.name)
        if known is not None:
            merged.append(record.with_marker(known.marker))
        elif new_marker is not None:
            merged.append(record.with_marker(new_marker))
        else:
            merged.append(record)

    merged.extend(
        record
        for record in previous.records
        if record.marker and record.name not in fresh_names
    )

    return merged


def keep_known_records(
    previous: LockFile, fresh: list[DependencyRecord]
) -> list[DependencyRecord]:
    """
    Keep the fresh dependencies that were already in the previous lock file.

    The freshly frozen pin wins over the previous one.
    """
    kept = []
    for record in fresh:
        known = previous.get(record.name)
        if known is None:
            logger.debug("Dropping %s from the lock file", record.name)
            continue

        kept.append(record.with_marker(known.marker))

    return kept


class LockOperations:
    def __init__(
        self,
        env_manager: EnvManager,
        io: IO | None = None,
        tool_version: str = __version__,
    ) -> None:
        self._env_manager = env_manager
        self._io = io or NullIO()
        self._tool_version = tool_version

    def metadata(
        self, interpreter: InterpreterInfo, settings: ProjectSettings
    ) -> LockMetadata:
        return LockMetadata(
            tool_version=self._tool_version,
            python_version=interpreter.version,
            python_platform=interpreter.platform,
            mode=settings.mode,
        )

    def generate(
        self,
        paths: Paths,
        interpreter: InterpreterInfo,
        settings: ProjectSettings,
        options: LockOptions | None = None,
    ) -> LockFile:
        self._io.write_line("<info>Locking dependencies</>")
        if not paths.setup_descriptor.exists():
            raise MissingSetupDescriptor(paths.setup_descriptor)

        self._env_manager.ensure(paths, interpreter, settings)
        self.upgrade_pip(paths)
        self.install_editable(paths, settings)

        fresh = self.freeze(paths)

        locker = Locker(paths.lock)
        previous = locker.read() if locker.is_locked() else None

        lock_file = LockFile(
            merge_records(previous, fresh, options),
            self.metadata(interpreter, settings),
        )
        locker.write(lock_file)
        self._io.write_line(
            f"Wrote <c1>{len(lock_file.records)}</> dependencies"
            f" to <comment>{paths.lock}</>"
        )

        return lock_file

    def bump(
        self,
        lock_path: Path,
        name: str,
        version: str,
        use_source_ref: bool,
        metadata: LockMetadata,
    ) -> bool:
        """
        Change the pin of `name` in the lock file.

        Return whether the lock file changed.
        """
        self._io.write_line(f"<info>Bumping</> <c1>{name}</> to <b>{version}</>")

        locker = Locker(lock_path)
        lock_file = locker.read()

        records = list(lock_file.records)
        for index, record in enumerate(records):
            if record.name != name:
                continue

            if use_source_ref:
                if not record.is_source_pinned:
                    continue
                bumped = record.with_revision(version)
            else:
                bumped = record.with_version(version)

            if bumped == record:
                self._io.write_line(f"<c1>{name}</> is already pinned to {version}")
                return False

            records[index] = bumped
            break
        else:
            raise DependencyNotFound(name)

        locker.write(LockFile(records, metadata))

        return True

    def tidy(
        self,
        paths: Paths,
        interpreter: InterpreterInfo,
        settings: ProjectSettings,
        active_env: str | None = None,
    ) -> LockFile:
        """
        Rebuild the virtualenv from scratch and remove the dependencies the
        project no longer needs from the lock file.
        """
        if active_env:
            raise ActiveEnvironmentConflict(active_env)

        self._io.write_line("<info>Cleaning up lock file</>")
        if not paths.setup_descriptor.exists():
            raise MissingSetupDescriptor(paths.setup_descriptor)

        locker = Locker(paths.lock)
        previous = locker.read()

        self._env_manager.clean(paths)
        self._env_manager.create(paths, interpreter, settings)
        self.upgrade_pip(paths)
        self.install_editable(paths, settings, constraint=paths.lock)

        lock_file = LockFile(
            keep_known_records(previous, self.freeze(paths)),
            self.metadata(interpreter, settings),
        )
        locker.write(lock_file)

        removed = previous.names - lock_file.names
        if removed:
            self._io.write_line(
                f"Removed <c1>{len(removed)}</> dependencies:"
                f" {', '.join(sorted(removed))}"
            )

        return lock_file

    def install_from_lock(self, paths: Paths) -> None:
        if not paths.lock.exists():
            raise MissingLock(paths.lock)

        self._io.write_line(
            f"<info>Installing dependencies from</> <comment>{paths.lock}</>"
        )
        # The command runs from the project directory.
        self._env_manager.run(
            paths,
            "python",
            ["-m", "pip", "install", "--requirement", paths.lock.name],
        )

    def develop(self, paths: Paths) -> None:
        if not paths.setup_descriptor.exists():
            raise MissingSetupDescriptor(paths.setup_descriptor)

        self._io.write_line("<info>Installing the project in develop mode</>")
        self._env_manager.run(
            paths, "python", ["-m", "pip", "install", "--no-deps", "--editable", "."]
        )

    def upgrade_pip(self, paths: Paths) -> None:
        self._io.write_line("<info>Upgrading pip</>")
        try:
            self._env_manager.run(
                paths, "python", ["-m", "pip", "install", "pip", "--upgrade"]
            )
        except ExternalCommandFailed as e:
            raise PipUpgradeFailed(e.exit_code, e.stderr) from e
        except BinaryNotFound as e:
            raise PipUpgradeFailed() from e

    def install_editable(
        self,
        paths: Paths,
        settings: ProjectSettings,
        constraint: Path | None = None,
    ) -> None:
        self._io.write_line(
            "<info>Installing dependencies from setup.py</> using"
            f" '<c1>{settings.mode}</>' extra dependencies"
        )
        args = ["-m", "pip", "install", "--editable", f".[{settings.mode}]"]
        if constraint is not None:
            args.extend(["--constraint", constraint.name])

        self._env_manager.run(paths, "python", args)

    def freeze(self, paths: Paths) -> list[DependencyRecord]:
        self._io.write_line(f"<info>Generating</> <comment>{paths.lock.name}</>")
        output = self._env_manager.run_capturing_stdout(paths, "python", FREEZE_ARGS)

        return parse_freeze_output(output)
