"""Exception types raised by sapling commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .language import ClassificationOutcome


class SaplingError(RuntimeError):
    """Base class for user-facing command failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class MissingNameError(SaplingError):
    """Raised when a command needs a project name and none was given."""


class ReservedNameError(SaplingError):
    """Raised when ``new`` is asked to create a project named ``.``."""


class InvalidNameError(SaplingError):
    """Raised when the project name fails validation."""

    def __init__(self, name: str) -> None:
        super().__init__(f"We currently do not support a name of `{name}`.")
        self.name = name


class InvalidLanguageTagError(SaplingError):
    """Raised when the ``--lang`` argument cannot be applied."""

    def __init__(self, outcome: ClassificationOutcome) -> None:
        super().__init__(outcome.diagnostic or f"Invalid `--lang` argument `{outcome.raw_input}`.")
        self.outcome = outcome


class DirectoryConflictError(SaplingError):
    """Raised when the target project directory already holds files."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Directory '{path.name}' already exists.")
        self.path = path


class TransactionStateError(SaplingError):
    """Raised when a scaffolding transaction is driven out of order."""


__all__ = [
    "DirectoryConflictError",
    "InvalidLanguageTagError",
    "InvalidNameError",
    "MissingNameError",
    "ReservedNameError",
    "SaplingError",
    "TransactionStateError",
]
