from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path


class VenvlockError(Exception):
    pass


class MissingSetupDescriptor(VenvlockError):
    def __init__(self, path: Path | None = None) -> None:
        self.path = path

        message = "setup.py not found."
        if path is not None:
            message = f"{path} not found."

        super().__init__(f"{message} You may want to run `venvlock init` now.")


class SetupDescriptorExists(VenvlockError):
    def __init__(self, path: Path) -> None:
        self.path = path

        super().__init__(f"{path} already exists. Aborting.")


class MissingEnvironment(VenvlockError):
    def __init__(self, path: Path) -> None:
        self.path = path

        super().__init__(
            f"Virtualenv in {path} does not exist."
            " Please run `venvlock lock` or `venvlock install` to create it."
        )


class MissingLock(VenvlockError):
    def __init__(self, path: Path) -> None:
        self.path = path

        super().__init__(
            f"{path} does not exist. Please run `venvlock lock` to create it."
        )


class EnvironmentCreationFailed(VenvlockError):
    def __init__(self, path: Path, exit_code: int | None = None) -> None:
        self.path = path
        self.exit_code = exit_code

        super().__init__(f"Failed to create virtualenv in {path}.")


class PipUpgradeFailed(VenvlockError):
    def __init__(self, exit_code: int | None = None, stderr: str = "") -> None:
        self.exit_code = exit_code
        self.stderr = stderr

        super().__init__(
            "Could not upgrade pip. The virtualenv may be broken:"
            " try running `venvlock clean`."
        )


class BinaryNotFound(VenvlockError):
    def __init__(self, path: Path) -> None:
        self.path = path

        super().__init__(f"Cannot run: '{path}' does not exist.")


class DependencyNotFound(VenvlockError):
    def __init__(self, name: str) -> None:
        self.name = name

        super().__init__(f"Could not find {name} in the lock file.")


class MalformedDependencyLine(VenvlockError):
    def __init__(self, line: str) -> None:
        self.line = line

        super().__init__(f"Could not parse dependency line: '{line}'.")


class ActiveEnvironmentConflict(VenvlockError):
    def __init__(self, path: str | None = None) -> None:
        self.path = path

        message = "Cannot run this command from an activated virtualenv"
        if path:
            message += f" ({path})"

        super().__init__(f"{message}. Please deactivate it first.")


class NoParentDirectory(VenvlockError):
    def __init__(self, path: Path) -> None:
        self.path = path

        super().__init__(f"Virtualenv path {path} has no parent.")


class ExternalCommandFailed(VenvlockError):
    def __init__(self, program: str, exit_code: int, stderr: str = "") -> None:
        self.program = program
        self.exit_code = exit_code
        self.stderr = stderr

        super().__init__(f"Command {program} failed with exit code {exit_code}.")
