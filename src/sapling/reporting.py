"""Advisory output for end users.

Commands talk to the user through a :class:`Reporter`. Diagnostics that must
not halt execution (an ambiguous ``--lang`` value, a rollback notice) are
written here, separately from the ``logging`` records meant for developers.
"""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import Protocol, TextIO, runtime_checkable

__all__ = ["Reporter", "StreamReporter", "WriteLevel"]


class WriteLevel(IntEnum):
    """Minimum severity a :class:`StreamReporter` lets through."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


@runtime_checkable
class Reporter(Protocol):
    """Sink for user-facing advisory lines."""

    def write_info_line(self, text: str) -> None: ...

    def write_warn_line(self, text: str) -> None: ...

    def write_error_line(self, text: str) -> None: ...


class StreamReporter:
    """Write advisory lines to a text stream, filtered by ``write_level``."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        write_level: WriteLevel | str = WriteLevel.INFO,
    ) -> None:
        self._stream = stream
        self.write_level = write_level

    @property
    def write_level(self) -> WriteLevel:
        return self._write_level

    @write_level.setter
    def write_level(self, value: WriteLevel | str) -> None:
        if isinstance(value, str):
            try:
                value = WriteLevel[value.upper()]
            except KeyError as exc:
                raise ValueError(f"unknown write level '{value}'") from exc
        self._write_level = WriteLevel(value)

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output.
        return self._stream if self._stream is not None else sys.stderr

    def write_line(self, text: str, level: WriteLevel) -> None:
        if level < self._write_level:
            return
        self.stream.write(text)
        if not text.endswith("\n"):
            self.stream.write("\n")

    def write_info_line(self, text: str) -> None:
        self.write_line(text, WriteLevel.INFO)

    def write_warn_line(self, text: str) -> None:
        self.write_line(f"WARNING: {text}", WriteLevel.WARNING)

    def write_error_line(self, text: str) -> None:
        self.write_line(text, WriteLevel.ERROR)
