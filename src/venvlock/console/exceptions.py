from __future__ import annotations

import dataclasses

from typing import TYPE_CHECKING

from cleo._utils import strip_tags
from cleo.exceptions import CleoError


if TYPE_CHECKING:
    from collections.abc import Sequence

    from cleo.io.io import IO

    from venvlock.exceptions import VenvlockError


SECTION_GUTTER = "    | "

VERBOSE_HINT = (
    "You can also run your <c1>venvlock</> command with <c1>-v</>"
    " to see more information."
)


class VenvlockConsoleError(CleoError):
    pass


@dataclasses.dataclass(frozen=True)
class ConsoleMessage:
    """
    A block of error output. Debug blocks are only displayed in verbose mode.
    """

    text: str
    debug: bool = False

    @property
    def stripped(self) -> str:
        return strip_tags(self.text)

    @classmethod
    def section(
        cls, title: str, body: str, gutter: str = SECTION_GUTTER, tag: str = ""
    ) -> ConsoleMessage:
        """
        A titled debug block, every line of `body` behind `gutter`.

        An empty body gives an empty message, which is never displayed.
        """
        lines = body.strip().splitlines()
        if not lines:
            return cls("", debug=True)

        text = "\n".join([f"<b>{title}:</>", *(gutter + line for line in lines)])
        if tag:
            text = f"<{tag}>{text}</>"

        return cls(text, debug=True)


class ConsoleRuntimeError(VenvlockConsoleError):
    def __init__(
        self,
        reason: str,
        details: Sequence[ConsoleMessage] = (),
        exit_code: int = 1,
    ) -> None:
        super().__init__(reason)
        self.exit_code = exit_code
        self._messages = [ConsoleMessage(reason), *details]

    def write(self, io: IO) -> None:
        if text := self.get_text(debug=io.is_verbose()):
            io.write_error_line(text)

    def get_text(self, debug: bool = False, strip: bool = False) -> str:
        """
        The non-empty messages separated by blank lines. Without `debug`, the
        debug messages are replaced by a hint about the verbose mode.
        """
        messages = [message for message in self._messages if message.text]
        shown = [message for message in messages if debug or not message.debug]
        if len(shown) < len(messages):
            shown.append(ConsoleMessage(VERBOSE_HINT))

        return "\n\n".join(
            message.stripped if strip else message.text for message in shown
        )

    def __str__(self) -> str:
        return self._messages[0].stripped.strip()

    @classmethod
    def from_error(cls, error: VenvlockError) -> ConsoleRuntimeError:
        """
        Create an instance describing `error`.

        The exit code is the one of the failed child process when `error`
        carries one, 1 otherwise. Captured error output is only displayed
        in verbose mode.
        """
        exit_code = getattr(error, "exit_code", None) or 1
        details = [
            ConsoleMessage.section(
                "Errors", getattr(error, "stderr", "") or "", tag="warning"
            )
        ]
        if error.__cause__ is not None:
            details.append(ConsoleMessage.section("Exception", str(error.__cause__)))

        return cls(f"<error>{error}</>", details, exit_code=exit_code)
