from __future__ import annotations

from tomlkit.exceptions import TOMLKitError

from venvlock.exceptions import VenvlockError


class TOMLError(TOMLKitError, VenvlockError):
    pass
