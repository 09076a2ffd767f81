from __future__ import annotations

import logging

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from logging import LogRecord


class IOFormatter(logging.Formatter):
    _colors = {
        "error": "fg=red",
        "warning": "fg=yellow",
        "debug": "options=dark",
        "info": "fg=blue",
    }

    def format(self, record: LogRecord) -> str:
        if not record.exc_info:
            level = record.levelname.lower()
            msg = record.getMessage()

            if level in self._colors:
                msg = f"<{self._colors[level]}>{msg}</>"

            record.msg = msg
            record.args = None

        formatted = super().format(record)

        if not record.name.startswith("venvlock"):
            # prefix lines from third-party packages for easier debugging
            formatted = f"[{record.name}] {formatted}"

        return formatted
