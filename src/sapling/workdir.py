"""Access to the current working directory.

The process working directory is global state. Commands and transactions
receive a :class:`WorkingDirectory` instead of calling :func:`os.chdir`
directly, so tests can substitute an in-memory implementation.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path

__all__ = ["ProcessWorkingDirectory", "WorkingDirectory"]


class WorkingDirectory(ABC):
    """Getter and setter for the directory relative paths resolve against."""

    @abstractmethod
    def get(self) -> Path:
        """Return the current working directory as an absolute path."""

    @abstractmethod
    def change(self, path: Path) -> None:
        """Make ``path`` the current working directory."""

    def resolve(self, path: str | Path) -> Path:
        """Resolve ``path`` against the current working directory."""

        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return self.get() / candidate


class ProcessWorkingDirectory(WorkingDirectory):
    """The real process working directory."""

    def get(self) -> Path:
        return Path(os.getcwd())

    def change(self, path: Path) -> None:
        os.chdir(path)
